import sys
import os
import asyncio
import argparse
import importlib.metadata
from typing import Optional, Tuple

from core.config import Config
from core.errors import describe_error
from utils.retry_http import NetworkFailure, RetryingClient, RetryPolicy

# Formatting Helpers
class Colors:
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

def print_header(msg: str):
    print(f"\n{Colors.BOLD}{Colors.HEADER}{msg}{Colors.ENDC}")

def print_success(msg: str):
    print(f"{Colors.GREEN}✅ {msg}{Colors.ENDC}")

def print_warning(msg: str):
    print(f"{Colors.WARNING}⚠ {msg}{Colors.ENDC}")

def print_error(msg: str):
    print(f"{Colors.FAIL}❌ {msg}{Colors.ENDC}")

def print_info(key: str, value: str):
    print(f"  {key:<20} {Colors.CYAN}{value}{Colors.ENDC}")

# --- Checks ---

def check_python() -> bool:
    print_header("System Environment")

    print_info("Python Executable", sys.executable)

    is_venv = (sys.prefix != sys.base_prefix)
    if is_venv:
        print_success("Virtualenv active")
    else:
        print_warning("Not running in a virtualenv (Recommended)")

    version, err = get_httpx_version()
    if version:
        print_info("httpx", version)
    else:
        print_warning(f"httpx: {err}")

    return True

def get_httpx_version() -> Tuple[Optional[str], Optional[str]]:
    """Returns (version_string, error_message)"""
    try:
        dist = importlib.metadata.distribution("httpx")
        return dist.version, None
    except importlib.metadata.PackageNotFoundError:
        return None, "Not installed as a distribution"

def check_config() -> str:
    print_header("Configuration")

    status = "GOOD"

    source = "env" if os.environ.get("COVERART_BASE_URL") else "default"
    print_info("Archive URL", f"{Config.COVER_ART_BASE_URL} ({source})")
    print_info("Max retries", str(Config.MAX_RETRIES))
    print_info("Retry delay", f"{Config.RETRY_DELAY_MS} ms x attempt")
    print_info("Request timeout", f"{Config.REQUEST_TIMEOUT} s")

    if not Config.COVER_ART_BASE_URL.startswith(("http://", "https://")):
        print_error("COVERART_BASE_URL must start with http:// or https://")
        status = "BROKEN"

    if Config.MAX_RETRIES == 0:
        print_warning("Retries are disabled (COVERART_MAX_RETRIES=0)")
        status = "DEGRADED" if status == "GOOD" else status

    return status

async def probe_archive(base_url: str) -> Optional[str]:
    """Returns an error message when the archive host cannot be reached."""
    async with RetryingClient(policy=RetryPolicy(max_retries=0)) as client:
        outcome = await client.fetch(base_url, follow_redirects=False)

    # Any HTTP answer (even 3xx/4xx) means the host is reachable
    if isinstance(outcome, NetworkFailure):
        return describe_error(outcome)
    return None

def check_connectivity() -> str:
    print_header("Connectivity")

    try:
        err = asyncio.run(probe_archive(Config.COVER_ART_BASE_URL))
    except Exception as e:
        err = describe_error(e)

    if err:
        print_error(f"Cover art archive unreachable: {err}")
        return "BROKEN"

    print_success("Cover art archive is reachable")
    return "GOOD"


# --- Main ---

def main(argv=None):
    parser = argparse.ArgumentParser(description="CoverArt System Doctor")
    parser.add_argument("--offline", action="store_true", help="Skip the connectivity check")
    args = parser.parse_args(argv)

    print(f"{Colors.BOLD}CoverArt Doctor 🩺{Colors.ENDC}")

    check_python()
    statuses = [check_config()]
    if not args.offline:
        statuses.append(check_connectivity())

    print("\n" + "-"*40)

    final_status = "GOOD"
    if "BROKEN" in statuses:
        final_status = "BROKEN"
    elif "DEGRADED" in statuses:
        final_status = "DEGRADED"

    if final_status == "GOOD":
        print(f"System Status: {Colors.GREEN}{Colors.BOLD}GOOD{Colors.ENDC}")
        print("Everything looks healthy.")
    elif final_status == "DEGRADED":
        print(f"System Status: {Colors.WARNING}{Colors.BOLD}DEGRADED{Colors.ENDC}")
        print("Lookups may fail more often than necessary.")
    else:
        print(f"System Status: {Colors.FAIL}{Colors.BOLD}BROKEN{Colors.ENDC}")
        print("Cover art lookups will not work.")
        sys.exit(1)

if __name__ == "__main__":
    main()
