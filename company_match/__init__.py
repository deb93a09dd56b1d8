"""Company entity resolution: fuzzy index, match cascade and crawl data fusion."""
