"""
dbxcore - CLI Mode Module

Implements the command-line operations. Uses the stored access token,
executes one operation and logs to a timestamped file.

Author: dbxcore Project
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict

from pydantic import ValidationError

from dbxcore.api import DropboxAPI, OAuthSession
from dbxcore.exceptions import DropboxAPIError, DropboxAuthError
from dbxcore.managers import ConfigManager
from dbxcore.models import Entry
from dbxcore.operations import DeltaOperations, DownloadOperations, UploadOperations, apply_delta_page


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_AUTH_ERROR = 3


def setup_cli_logging(config_manager: ConfigManager) -> Path:
    """
    Setup logging for CLI mode with timestamped log file.

    Creates log file with format: dbxcore-YYYY-MM-DD-HH-MM-SS.log
    in a "logs" subdirectory next to config.json.

    Args:
        config_manager: ConfigManager instance for log settings

    Returns:
        Path to the created log file
    """
    log_level = config_manager.get("log_level", "INFO")

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_dir = config_manager.config_file.parent / "logs"
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / f"dbxcore-{timestamp}.log"

    # Results go to stdout, so console logging goes to stderr
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stderr)
        ]
    )

    logger = logging.getLogger(__name__)
    logger.debug(f"dbxcore CLI - Log file: {log_file}")
    return log_file


def cleanup_old_logs(config_manager: ConfigManager, current_log: Path):
    """
    Delete log files older than retention period.

    Args:
        config_manager: ConfigManager instance for retention settings
        current_log: Path to current log file (don't delete this)
    """
    logger = logging.getLogger(__name__)
    retention_days = config_manager.get("log_retention_days", 30)

    if retention_days <= 0:
        return  # Retention disabled

    cutoff_time = datetime.now().timestamp() - (retention_days * 86400)

    deleted_count = 0
    for log_file in current_log.parent.glob("dbxcore-*.log"):
        if log_file == current_log:
            continue

        try:
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink()
                deleted_count += 1
        except OSError as e:
            logger.warning(f"Failed to delete old log file {log_file}: {e}")

    if deleted_count > 0:
        logger.info(f"Deleted {deleted_count} old log file(s)")


def format_entry(entry: Entry) -> str:
    """One-line listing of an entry."""
    kind = "d" if entry.is_dir else "-"
    deleted = " (deleted)" if entry.is_deleted else ""
    return f"{kind} {entry.bytes:>12} {entry.modified:<31} {entry.path}{deleted}"


def authorize(config_mgr: ConfigManager) -> int:
    """Run the OAuth2 code flow interactively and store the token."""
    logger = logging.getLogger(__name__)
    config = config_mgr.config
    if not config.client_id or not config.client_secret:
        logger.error("Set client_id and client_secret in config.json first")
        return EXIT_CONFIG_ERROR

    oauth = OAuthSession(config.auth_url, config.token_url, config.client_id,
                         config.client_secret, verify_ssl=config.verify_ssl)
    try:
        print(f"Please visit:\n{oauth.authorize_url()}")
        code = input("Enter the code: ").strip()
        token = oauth.exchange_code(code)
    finally:
        oauth.close()

    config_mgr.store_token(token)
    logger.info("Authorization successful")
    return EXIT_SUCCESS


def execute_command(args: argparse.Namespace, api_client: DropboxAPI) -> int:
    """
    Dispatch one authenticated command.

    Returns:
        Exit code
    """
    logger = logging.getLogger(__name__)
    command = args.command

    if command == "info":
        account = api_client.account_info()
        print(f"{account.display_name} ({account.country}) uid={account.uid}")
        print(f"quota: {account.quota_info.normal + account.quota_info.shared}/{account.quota_info.quota} bytes")

    elif command == "ls":
        entry = api_client.metadata(args.path, list_contents=True, include_deleted=args.deleted)
        for child in entry.contents or [entry]:
            print(format_entry(child))

    elif command == "put":
        uploads = UploadOperations(api_client)
        if args.chunked:
            with open(args.src, 'rb') as f:
                entry = uploads.upload_by_chunk(f, api_client.config.chunk_size, args.dst,
                                                not args.no_overwrite, args.parent_rev)
        else:
            entry = uploads.upload_file(args.src, args.dst, not args.no_overwrite, args.parent_rev)
        print(format_entry(entry))

    elif command == "get":
        downloads = DownloadOperations(api_client)
        if args.resume:
            downloads.download_to_file_resume(args.src, args.dst, args.rev)
        else:
            downloads.download_to_file(args.src, args.dst, args.rev)
        logger.info(f"Saved {args.src} to {args.dst}")

    elif command == "mkdir":
        print(format_entry(api_client.create_folder(args.path)))

    elif command == "rm":
        print(format_entry(api_client.delete(args.path)))

    elif command == "mv":
        print(format_entry(api_client.move(args.src, args.dst)))

    elif command == "cp":
        print(format_entry(api_client.copy(args.src, args.dst, is_ref=args.ref)))

    elif command == "copyref":
        ref = api_client.copy_ref(args.path)
        print(f"{ref.copy_ref} (expires {ref.expires})")

    elif command == "search":
        for entry in api_client.search(args.path, args.query, args.limit, args.deleted):
            print(format_entry(entry))

    elif command == "revisions":
        for entry in api_client.revisions(args.path, args.limit):
            print(f"{entry.revision:<16} {format_entry(entry)}")

    elif command == "restore":
        print(format_entry(api_client.restore(args.path, args.rev)))

    elif command == "delta":
        state: Dict[str, Entry] = {}
        cursor = args.cursor
        for page in DeltaOperations(api_client).iter_delta(args.cursor, args.prefix):
            apply_delta_page(state, page)
            for change in page.entries:
                marker = "-" if change.entry is None else "+"
                print(f"{marker} {change.path}")
            cursor = page.cursor
        logger.info(f"{len(state)} live entries in this feed")
        print(f"cursor: {cursor}")

    elif command == "poll":
        poll = DeltaOperations(api_client).longpoll_delta(args.cursor, args.timeout)
        print(f"changes: {str(poll.changes).lower()} backoff: {poll.backoff}")

    elif command == "share":
        link = api_client.media(args.path) if args.media else api_client.shares(args.path, args.short)
        print(f"{link.url} (expires {link.expires})")

    elif command == "thumb":
        entry = DownloadOperations(api_client).thumbnails_to_file(args.src, args.dst, args.format, args.size)
        if entry is not None:
            print(format_entry(entry))

    else:
        logger.error(f"Unknown command: {command}")
        return EXIT_FAILURE

    return EXIT_SUCCESS


def run_cli_operation(args: argparse.Namespace) -> int:
    """
    Execute CLI operation.

    Process:
    1. Load configuration
    2. Setup logging to timestamped file
    3. Run the authorization flow, or load the stored token
    4. Execute requested command
    5. Return appropriate exit code

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logger = None
    api_client = None

    try:
        config_mgr = ConfigManager(args.config)
        try:
            config_mgr.load_config()
        except (ValueError, ValidationError) as e:
            print(f"Invalid configuration file {config_mgr.config_file}: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        log_file = setup_cli_logging(config_mgr)
        logger = logging.getLogger(__name__)
        cleanup_old_logs(config_mgr, log_file)

        if args.command == "auth":
            return authorize(config_mgr)

        if args.command == "logout":
            config_mgr.delete_token()
            return EXIT_SUCCESS

        token = config_mgr.get_token()
        if not token:
            logger.error("No stored access token. Run 'dbxcore auth' first.")
            return EXIT_AUTH_ERROR

        api_client = DropboxAPI(config_mgr.config)
        api_client.credentials.set_access_token(token)

        logger.debug(f"Running command: {args.command}")
        return execute_command(args, api_client)

    except DropboxAuthError as e:
        if logger:
            logger.error(f"Authentication failed: {e}")
        else:
            print(f"Authentication failed: {e}", file=sys.stderr)
        return EXIT_AUTH_ERROR

    except DropboxAPIError as e:
        if logger:
            logger.error(f"API Error: {e}")
        else:
            print(f"API Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except KeyboardInterrupt:
        if logger:
            logger.warning("Operation cancelled by user (Ctrl+C)")
        else:
            print("\nOperation cancelled by user", file=sys.stderr)
        return EXIT_FAILURE

    except Exception as e:
        if logger:
            logger.exception(f"Unexpected error: {e}")
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    finally:
        if api_client:
            api_client.close()
