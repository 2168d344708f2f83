"""Report publish results to the surrounding CI job.

When ``GITHUB_OUTPUT`` is set (GitHub Actions), two step outputs are written:

- ``internalSharingDownloadUrls``: JSON list of every URL
- ``internalSharingDownloadUrl``: the last URL
"""

from __future__ import annotations

import json
from pathlib import Path

from playpub.services.publish.model import PublishOutcome

OUTPUT_URLS = "internalSharingDownloadUrls"
OUTPUT_URL = "internalSharingDownloadUrl"


def track_test_url(package_name: str, version_code: int) -> str:
    return f"https://play.google.com/apps/test/{package_name}/{version_code}"


def outcome_urls(outcome: PublishOutcome, *, package_name: str) -> list[str]:
    """Download URLs on the sharing path, test-track links otherwise."""
    if outcome.download_urls:
        return list(outcome.download_urls)
    return [track_test_url(package_name, code) for code in outcome.version_codes]


def render_outputs(urls: list[str]) -> dict[str, str]:
    outputs = {OUTPUT_URLS: json.dumps(urls)}
    if urls:
        outputs[OUTPUT_URL] = urls[-1]
    return outputs


def write_github_outputs(path: Path, urls: list[str]) -> None:
    with path.open("a", encoding="utf-8") as f:
        for key, value in render_outputs(urls).items():
            f.write(f"{key}={value}\n")
