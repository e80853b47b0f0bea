"""
Management command to render a wiki page from a directory of wiki files.

Useful for checking how a page renders without going through a view, and for
diffing output after changing the filter chain.
"""

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from wikiengine.markup.config import get_markup_config
from wikiengine.markup.exceptions import MarkupError
from wikiengine.markup.renderer import FilterChain, build_context
from wikiengine.markup.resolver import LocalFileLookup


class Command(BaseCommand):
    help = 'Render a wiki page to HTML and write it to stdout'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            type=str,
            help='Wiki path of the page, relative to --root',
        )
        parser.add_argument(
            '--root',
            type=str,
            default='.',
            help='Directory holding the wiki files (default: current directory)',
        )
        parser.add_argument(
            '--page-version',
            type=str,
            help='Version identifier to render the page at',
        )
        parser.add_argument(
            '--no-follow',
            action='store_true',
            help='Use the history sanitizer (adds rel="nofollow" to links)',
        )
        parser.add_argument(
            '--encoding',
            type=str,
            help='Target encoding of the rendered output',
        )
        parser.add_argument(
            '--include-levels',
            type=int,
            help='Maximum nesting depth for included pages',
        )
        parser.add_argument(
            '--metadata',
            action='store_true',
            help='Also print the page metadata as JSON',
        )

    def handle(self, *args, **options):
        path = options['path']
        root = Path(options['root'])
        if not root.is_dir():
            raise CommandError(f'Wiki root does not exist: {root}')

        lookup = LocalFileLookup(root)
        page = lookup.file(path.lstrip('/'), options.get('page_version'))
        if page is None:
            raise CommandError(f'No page found at: {path}')

        config = get_markup_config()
        try:
            context = build_context(
                page.data,
                config=config,
                path=page.path,
                version_id=options.get('page_version'),
                no_follow=options.get('no_follow'),
                encoding=options.get('encoding'),
                include_levels=options.get('include_levels'),
                lookup=lookup,
            )
            html = FilterChain(config.filters_for(context.format)).render(context)
        except MarkupError as e:
            raise CommandError(f'Could not render {page.path}: {e}') from e

        self.stdout.write(html)

        if options.get('metadata'):
            self.stdout.write(
                json.dumps(context.metadata or {}, indent=2, sort_keys=True, default=str)
            )
