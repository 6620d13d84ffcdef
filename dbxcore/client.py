"""
dbxcore - Main Entry Point

Parses command-line arguments and runs one API operation.

Author: dbxcore Project
"""

import sys
import argparse
from pathlib import Path

from dbxcore.constants import POLL_MAX_TIMEOUT, POLL_MIN_TIMEOUT


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog='dbxcore',
        description='dbxcore - Dropbox Core API command-line client'
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to config.json (default: current directory)')

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('auth', help='Authorize this application and store the access token')
    commands.add_parser('logout', help='Remove the stored access token')
    commands.add_parser('info', help='Show account information')

    ls = commands.add_parser('ls', help='List a folder')
    ls.add_argument('path', nargs='?', default='/')
    ls.add_argument('--deleted', action='store_true', help='Include deleted entries')

    put = commands.add_parser('put', help='Upload a local file')
    put.add_argument('src')
    put.add_argument('dst')
    put.add_argument('--chunked', action='store_true', help='Force chunked upload')
    put.add_argument('--no-overwrite', action='store_true', help='Rename instead of overwriting')
    put.add_argument('--parent-rev', default='', help='Revision the upload is based on')

    get = commands.add_parser('get', help='Download a file')
    get.add_argument('src')
    get.add_argument('dst')
    get.add_argument('--rev', default='', help='Specific revision')
    get.add_argument('--resume', action='store_true', help='Append to an interrupted download')

    mkdir = commands.add_parser('mkdir', help='Create a folder')
    mkdir.add_argument('path')

    rm = commands.add_parser('rm', help='Delete a file or folder')
    rm.add_argument('path')

    mv = commands.add_parser('mv', help='Move a file or folder')
    mv.add_argument('src')
    mv.add_argument('dst')

    cp = commands.add_parser('cp', help='Copy a file or folder')
    cp.add_argument('src')
    cp.add_argument('dst')
    cp.add_argument('--ref', action='store_true', help='src is a copy reference')

    copyref = commands.add_parser('copyref', help='Create a copy reference to a file')
    copyref.add_argument('path')

    search = commands.add_parser('search', help='Search file names')
    search.add_argument('path')
    search.add_argument('query')
    search.add_argument('--limit', type=int, default=0)
    search.add_argument('--deleted', action='store_true', help='Include deleted entries')

    revisions = commands.add_parser('revisions', help='List revisions of a file')
    revisions.add_argument('path')
    revisions.add_argument('--limit', type=int, default=0)

    restore = commands.add_parser('restore', help='Restore a file to a revision')
    restore.add_argument('path')
    restore.add_argument('rev')

    delta = commands.add_parser('delta', help='Show changes since a cursor')
    delta.add_argument('--cursor', default='')
    delta.add_argument('--prefix', default='', help='Only report changes under this path')

    poll = commands.add_parser('poll', help='Wait for changes after a cursor')
    poll.add_argument('cursor')
    poll.add_argument('--timeout', type=int, default=0,
                      help=f'Seconds to wait ({POLL_MIN_TIMEOUT}-{POLL_MAX_TIMEOUT}, 0 for server default)')

    share = commands.add_parser('share', help='Create a link to a file or folder')
    share.add_argument('path')
    share.add_argument('--short', action='store_true', help='Shortened URL')
    share.add_argument('--media', action='store_true', help='Direct streaming link')

    thumb = commands.add_parser('thumb', help='Download the thumbnail of an image')
    thumb.add_argument('src')
    thumb.add_argument('dst')
    thumb.add_argument('--format', default='', choices=['', 'jpeg', 'png'])
    thumb.add_argument('--size', default='', choices=['', 'xs', 's', 'm', 'l', 'xl'])

    return parser


def main(argv=None):
    """
    Main entry point for the dbxcore command-line client.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    from dbxcore.cli import run_cli_operation
    return run_cli_operation(args)


if __name__ == '__main__':
    sys.exit(main())
