import sys


def render_result(album_id: str, url: str | None):
    # -------------------------
    # Found
    # -------------------------
    if url:
        print(url)
        return

    # -------------------------
    # Not found / lookup failed
    # -------------------------
    print(f"✖ No cover art found for {album_id}", file=sys.stderr)
