import pytest

from company_match.loaders import load_catalog, load_query_sample, load_websites


def test_load_catalog_blank_cells_become_none(tmp_path):
    path = tmp_path / "companies.csv"
    path.write_text(
        "domain,company_commercial_name,company_legal_name,company_all_available_names\n"
        "Acme.com,Acme Inc,,Acme | Acme Incorporated\n"
        "widgets.io,Widget Works,Widget Works LLC,\n"
        ",Orphan Co,,\n"
    )

    records = load_catalog(str(path))

    assert [r.domain for r in records] == ["acme.com", "widgets.io"]
    assert records[0].legal_name is None
    assert records[0].all_names == "Acme | Acme Incorporated"
    assert records[1].legal_name == "Widget Works LLC"
    assert records[1].phone_numbers == []


def test_load_catalog_requires_domain_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("name\nAcme\n")

    with pytest.raises(KeyError):
        load_catalog(str(path))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_websites(str(tmp_path / "missing.csv"))


def test_load_websites(tmp_path):
    path = tmp_path / "sites.csv"
    path.write_text("domain\nacme.com\n\nwidgets.io\n")

    assert load_websites(str(path)) == ["acme.com", "widgets.io"]


def test_load_query_sample_keeps_phone_formatting(tmp_path):
    path = tmp_path / "queries.csv"
    path.write_text(
        "input name,input phone,input website,input_facebook\n"
        "Acme,(555) 123-4567,https://acme.com,\n"
        ",15551234567,,facebook.com/acme\n"
    )

    queries = load_query_sample(str(path))

    assert queries[0].name == "Acme"
    assert queries[0].phone == "(555) 123-4567"
    assert queries[0].website == "https://acme.com"
    assert queries[0].facebook is None
    assert queries[1].name is None
    assert queries[1].phone == "15551234567"
    assert queries[1].facebook == "facebook.com/acme"
