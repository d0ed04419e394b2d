import pytest

from download_link import (
    REDIRECT_DELAY_SECONDS, RELEASES_URL, build_download_url, main,
    parse_params, plan_redirect, wants_download,
)

ISO_PARAMS = {"d": "debian", "de": "xfce", "pv": "standard", "a": "amd64", "v": "v1.2.0"}


def test_collection_torrent_strips_trailing_zero():
    url = build_download_url({"collection": "complete", "v": "v1.2.0"})
    assert url == f"{RELEASES_URL}/v1.2.0/minios-1.2-complete-collection.torrent"


def test_collection_keeps_non_zero_patch():
    url = build_download_url({"collection": "complete", "v": "v5.1.1"})
    assert url.endswith("/v5.1.1/minios-5.1.1-complete-collection.torrent")


def test_collection_without_version():
    assert build_download_url({"collection": "complete"}) is None


def test_iso_file_name():
    url = build_download_url(ISO_PARAMS)
    assert url == f"{RELEASES_URL}/v1.2.0/minios-debian-xfce-standard-amd64-1.2.0.iso"


def test_release_torrent():
    url = build_download_url(dict(ISO_PARAMS, torrent="1"))
    assert url == f"{RELEASES_URL}/v1.2.0/minios-1.2.0.torrent"


def test_version_without_prefix():
    url = build_download_url(dict(ISO_PARAMS, v="4.0"))
    assert url.endswith("/4.0/minios-debian-xfce-standard-amd64-4.0.iso")


@pytest.mark.parametrize("missing", ["d", "de", "pv", "a", "v"])
def test_missing_iso_parameter(missing):
    params = {k: v for k, v in ISO_PARAMS.items() if k != missing}
    assert build_download_url(params) is None


def test_wants_download():
    assert wants_download({"v": "v1.0"})
    assert wants_download({"collection": "complete"})
    assert not wants_download({"lang": "fr"})


def test_plan_redirect():
    redirect = plan_redirect("?d=debian&de=xfce&pv=standard&a=amd64&v=v1.2.0&lang=fr")
    assert redirect.url.endswith("minios-debian-xfce-standard-amd64-1.2.0.iso")
    assert redirect.delay == REDIRECT_DELAY_SECONDS == 2


def test_plan_redirect_landing_page():
    assert plan_redirect("lang=fr") is None


def test_plan_redirect_incomplete_parameters_shows_view_without_redirect():
    redirect = plan_redirect("v=v1.2.0&d=debian")
    assert redirect is not None
    assert redirect.url is None
    assert redirect.delay is None


@pytest.mark.parametrize("query", ["v=", "?collection=", "collection=complete&v="])
def test_blank_parameters_still_request_download(query):
    assert wants_download(parse_params(query))
    assert plan_redirect(query) == (None, None)


def test_parse_params_keeps_blank_values():
    assert parse_params("?v=&lang=fr") == {"v": "", "lang": "fr"}


def test_cli(capsys):
    assert main(["collection=complete&v=v1.2.0"]) == 0
    assert capsys.readouterr().out.strip().endswith("minios-1.2-complete-collection.torrent")


def test_cli_without_link(capsys):
    assert main(["v=v1.2.0"]) == 1


def test_cli_without_download_request(capsys):
    assert main(["lang=fr"]) == 1
    assert "No download requested" in capsys.readouterr().err
