"""
================================================================================
Allure Report Utilities
================================================================================

This module provides helpers for attaching browser evidence to Allure
test reports.

Features:
- Screenshot / text / HTML attachment helpers
- Failure artifact bundles (screenshot, console log, page markup)
- Every attachment is best-effort: one failing attach never hides the others

================================================================================
"""

from pathlib import Path
from typing import Optional, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_png(png: bytes, name: str = "Screenshot") -> bool:
    """
    Attach PNG bytes to Allure report.

    Args:
        png: Image bytes
        name: Attachment name

    Returns:
        True when attached
    """
    try:
        allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
        return True
    except Exception as e:
        logger.warning(f"⚠️ Could not attach screenshot '{name}': {e}")
        return False


def attach_text(text: str, name: str = "Text") -> bool:
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    try:
        allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)
        return True
    except Exception as e:
        logger.warning(f"⚠️ Could not attach text '{name}': {e}")
        return False


def attach_html(html: str, name: str = "HTML") -> bool:
    """
    Attach HTML content to Allure report.

    Args:
        html: HTML to attach
        name: Attachment name
    """
    try:
        allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)
        return True
    except Exception as e:
        logger.warning(f"⚠️ Could not attach HTML '{name}': {e}")
        return False


def attach_failure_artifacts(
    test_name: str,
    screenshot: Optional[bytes] = None,
    console_log: Optional[str] = None,
    page_source: Optional[str] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> int:
    """
    Attach the evidence captured for a failed test.

    Missing parts are skipped. When `output_dir` is given each part is
    also written to `<output_dir>/<test_name>.{png,log,html}`.

    Args:
        test_name: Name used for attachment titles and file names
        screenshot: PNG bytes
        console_log: Browser console lines joined by newlines
        page_source: Page markup
        output_dir: Directory for on-disk copies

    Returns:
        Number of parts attached
    """
    attached = 0
    if screenshot is not None:
        attached += attach_png(screenshot, name=f"{test_name} - screenshot")
    if console_log is not None:
        attached += attach_text(console_log, name=f"{test_name} - console log")
    if page_source is not None:
        attached += attach_html(page_source, name=f"{test_name} - page source")

    if output_dir is not None:
        _write_artifacts(Path(output_dir), test_name, screenshot, console_log, page_source)

    logger.info(f"Attached {attached} failure artifact(s) for {test_name}")
    return attached


def _write_artifacts(
    output_dir: Path,
    test_name: str,
    screenshot: Optional[bytes],
    console_log: Optional[str],
    page_source: Optional[str],
) -> None:
    safe_name = "".join(c if c.isalnum() or c in "-_." else "_" for c in test_name)
    parts = [
        (screenshot, ".png"),
        (console_log, ".log"),
        (page_source, ".html"),
    ]
    for content, suffix in parts:
        if content is None:
            continue
        path = output_dir / f"{safe_name}{suffix}"
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
            logger.debug(f"Artifact saved: {path}")
        except OSError as e:
            logger.warning(f"⚠️ Could not write artifact {path}: {e}")


__all__ = [
    "attach_failure_artifacts",
    "attach_html",
    "attach_png",
    "attach_text",
]
