#!/usr/bin/env python3
"""
Build the release download link from the page's query parameters.

    collection  "complete" selects the collection torrent
    v           release tag, e.g. v1.2.0
    d, de, pv, a
                distribution, desktop environment, package variant, architecture
    torrent     "1" selects the release torrent instead of the ISO
"""

import sys
import logging
import argparse
import regex as re
from collections import namedtuple
from urllib.parse import parse_qsl

from log_setup import setup_logger

logger = logging.getLogger("download_link")

RELEASES_URL = "https://github.com/minios-linux/minios-live/releases/download"
REDIRECT_DELAY_SECONDS = 2

ISO_PARAMS = ("d", "de", "pv", "a", "v")

DownloadRedirect = namedtuple("DownloadRedirect", ["url", "delay"])


def parse_params(query_string):
    return dict(parse_qsl(query_string.lstrip("?"), keep_blank_values=True))


def wants_download(params):
    return "collection" in params or "v" in params


def version_number(version):
    return version[1:] if version.startswith("v") else version


def build_download_url(params):
    """Return the download URL, or None when required parameters are missing."""
    version = params.get("v")
    logger.info(f"Processing download: {params}")

    if params.get("collection") == "complete":
        if not version:
            logger.error("Missing version parameter for collection download.")
            return None
        collection_version = re.sub(r'\.0$', '', version_number(version))
        return f"{RELEASES_URL}/{version}/minios-{collection_version}-complete-collection.torrent"

    if not all(params.get(name) for name in ISO_PARAMS):
        logger.warning("Missing required parameters for auto-download.")
        return None

    if params.get("torrent") == "1":
        return f"{RELEASES_URL}/{version}/minios-{version_number(version)}.torrent"

    file_name = "minios-{}-{}-{}-{}-{}.iso".format(
        params["d"], params["de"], params["pv"], params["a"], version_number(version)
    )
    return f"{RELEASES_URL}/{version}/{file_name}"


def plan_redirect(query_string):
    """
    Decide what the page does for a query string.

    None: no download was requested, the landing page stays.
    DownloadRedirect(None, None): the download view is shown but the link
    cannot be built, so there is no redirect.
    DownloadRedirect(url, delay): redirect to url after delay seconds.
    """
    params = parse_params(query_string)
    if not wants_download(params):
        return None
    url = build_download_url(params)
    if not url:
        return DownloadRedirect(None, None)
    logger.info(f"Constructed URL: {url}")
    return DownloadRedirect(url, REDIRECT_DELAY_SECONDS)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the download URL for a query string.")
    parser.add_argument("query", help="Query string, e.g. 'd=debian&de=xfce&pv=standard&a=amd64&v=v1.2.0'")
    parser.add_argument("--verbose", "-v", action="store_true", help="Increase output verbosity")
    args = parser.parse_args(argv)

    setup_logger("download_link", args.verbose)

    redirect = plan_redirect(args.query)
    if redirect is None:
        print("❌ No download requested (expected 'collection' or 'v')", file=sys.stderr)
        return 1
    if redirect.url is None:
        print("❌ No download link for these parameters", file=sys.stderr)
        return 1

    print(redirect.url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
