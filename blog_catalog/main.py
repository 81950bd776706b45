##########################################################################################
#
# Script name: main.py
#
# Description: CLI entrypoint for fetching the article catalog and writing the static blog.
#
##########################################################################################

import argparse
import logging
import os
import sys
import time
from datetime import date

from .catalog import CatalogStore
from .client import ContentClient
from .config import SiteSettings, load_client_settings, load_site_settings
from .fetchers import build_sample_articles
from .render import write_site


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(os.path.basename(sys.argv[0]))
log.setLevel(logging.DEBUG)
log.propagate = False
formatter = logging.Formatter(
    '%(asctime)-15s [%(funcName)25s:%(lineno)-5s] %(levelname)-8s %(message)s'
)

# File handler for logging
fh = logging.FileHandler('blog_catalog.log', mode='w')
fh.setLevel(logging.DEBUG)
fh.setFormatter(formatter)
if not any(isinstance(handler, logging.FileHandler) for handler in log.handlers):
    log.addHandler(fh)

root_log = logging.getLogger()
root_log.setLevel(logging.DEBUG)
if not any(isinstance(handler, logging.FileHandler) for handler in root_log.handlers):
    root_log.addHandler(fh)


# ****************************************************************************************
# Functions
# ****************************************************************************************


def build_blog(
    store: CatalogStore,
    output_dir: str,
    client=None,
    site: SiteSettings | None = None,
    search: str | None = None,
) -> list[str]:
    result = store.refresh_if_stale()
    if result is not None and result.unavailable:
        log.warning('Content source unavailable; rendering an empty catalog.')
    elif not store.snapshot:
        log.info('Content source returned no articles.')
    written = write_site(store, output_dir=output_dir, client=client, site=site, search=search)
    log.info('Built %d article page(s) into %s', len(written), output_dir)
    return written


def watch_blog(
    store: CatalogStore,
    output_dir: str,
    client=None,
    site: SiteSettings | None = None,
    search: str | None = None,
    max_cycles: int | None = None,
    sleep=time.sleep,
) -> int:
    '''
    Rebuild the site each time the catalog's revalidation window lapses.

    Output:
        Number of builds performed. Runs until interrupted unless max_cycles is set.
    '''
    builds = 0
    while max_cycles is None or builds < max_cycles:
        if builds == 0 or store.is_stale():
            build_blog(store, output_dir, client=client, site=site, search=search)
            builds += 1
            continue
        sleep(1)
    return builds


# ****************************************************************************************
# Handle the arguments
# ****************************************************************************************


def handle_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Fetch articles from the content API and write a static blog.')
    parser.add_argument('--config', default='config/site.yaml', help='Path to site config YAML.')
    parser.add_argument('--output-dir', default='site', help='Directory where static site is written.')
    parser.add_argument('--search', default=None, help='Only list articles matching this query.')
    parser.add_argument(
        '--sample',
        action='store_true',
        help='Use local sample data and skip all network requests.',
    )
    parser.add_argument('--watch', action='store_true', help='Rebuild whenever the revalidation window lapses.')
    parser.add_argument('--max-cycles', type=int, default=None, help='Stop watching after this many builds.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output to stdout.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Minimal stdout.')
    args = parser.parse_args(argv)

    # Configure stdout logging based on arguments
    ch = logging.StreamHandler(sys.stdout)
    if args.verbose:
        ch.setLevel(logging.DEBUG)
    elif args.quiet:
        ch.setLevel(logging.ERROR)
    else:
        ch.setLevel(logging.INFO)
    ch.setFormatter(formatter)
    log.addHandler(ch)
    root_log.addHandler(ch)

    log.debug('Checking script requirements...')
    if not args.verbose and not args.quiet:
        log.debug('No output level specified. Defaulting to INFO.')

    log.info('++++++++++++++++++++++++++++++++++++++++++++++')
    log.info('+  %s', os.path.basename(sys.argv[0]))
    log.info('+  Python Version: %s', sys.version.split()[0])
    log.info('+  Today is: %s', date.today())
    log.info('+  Output dir: %s', args.output_dir)
    log.info('++++++++++++++++++++++++++++++++++++++++++++++')
    return args


# ****************************************************************************************
# Main
# ****************************************************************************************


def main(argv: list[str] | None = None) -> None:
    args = handle_args(argv)
    site = load_site_settings(args.config)

    if args.sample:
        log.debug('Using sample data for site generation.')
        store = CatalogStore(seed=build_sample_articles())
        write_site(store, output_dir=args.output_dir, site=site, search=args.search)
        log.info('Generated sample site at %s', args.output_dir)
        return

    with ContentClient(load_client_settings(args.config)) as client:
        store = CatalogStore(client=client, revalidate_seconds=site.revalidate_seconds)
        if args.watch:
            watch_blog(store, args.output_dir, client=client, site=site, search=args.search, max_cycles=args.max_cycles)
        else:
            build_blog(store, args.output_dir, client=client, site=site, search=args.search)
    log.info('Generated site at %s', args.output_dir)


if __name__ == '__main__':
    main()
