"""
Export of generated code: clipboard payload and zip archive.

Each export is a one-shot action. Failures are reported once through an error
notification; an archive is returned only when it was built completely.
"""

import io
import re
import zipfile
from dataclasses import dataclass
from urllib.parse import quote

from loguru import logger as log

from common import global_config
from src.services.customizer.code_generator import assemble
from src.services.customizer.exceptions import ExportError
from src.services.customizer.models import (
    Customizations,
    Notification,
    NotificationType,
    Template,
)

STYLE_BLOCK = re.compile(r"<style>([\s\S]*?)</style>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_UNSAFE_HEADER_CHARS = re.compile(r"[^\x20-\x7e]|[\"\\]")
FALLBACK_ARCHIVE_NAME = "template.zip"


@dataclass
class CopyResult:
    code: str | None
    notification: Notification


@dataclass
class ArchiveResult:
    filename: str | None
    content: bytes | None
    notification: Notification

    @property
    def success(self) -> bool:
        return self.content is not None


def notify(kind: NotificationType, message: str) -> Notification:
    return Notification(
        type=kind,
        message=message,
        dismiss_after_seconds=global_config.editor.notification_dismiss_seconds,
    )


def split_style_block(code: str) -> tuple[str, str]:
    """Split assembled code into (markup and scripts, css of the first style block)."""
    match = STYLE_BLOCK.search(code)
    styles = match.group(1) if match else ""
    markup = STYLE_BLOCK.sub("", code, count=1)
    return markup, styles


def archive_filename(template_name: str) -> str:
    return _WHITESPACE.sub("-", template_name.strip().lower()) + ".zip"


def ascii_filename(filename: str) -> str:
    """Reduce `filename` to printable ASCII that is safe inside a quoted header value."""
    stem = _UNSAFE_HEADER_CHARS.sub("", filename.removesuffix(".zip")).strip("-. ")
    return f"{stem}.zip" if stem else FALLBACK_ARCHIVE_NAME


def content_disposition(filename: str) -> str:
    """Attachment header carrying an ASCII fallback plus the RFC 5987 UTF-8 name."""
    return (
        f'attachment; filename="{ascii_filename(filename)}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


def render_readme(template: Template, customizations: Customizations) -> str:
    archive = global_config.export.archive
    brand = global_config.export.brand_name
    host = global_config.export.host_platform
    image_lines = "\n".join(f"- {url}" for url in customizations.images.values())

    return (
        f"# {template.name}\n"
        "\n"
        f"This template was customized using {brand}.\n"
        "\n"
        "## Images\n"
        "The following image URLs are used in this template:\n"
        f"{image_lines}\n"
        "\n"
        f"## Usage with {host}\n"
        f"1. Use the '{archive.combined_file}' file to copy the complete code\n"
        f"2. Make sure to keep the special script for padding control in {host}\n"
        f"3. Or use '{archive.html_file}' and '{archive.css_file}' separately if your platform allows\n"
        "\n"
    )


def build_archive_bytes(template: Template, customizations: Customizations) -> bytes:
    archive = global_config.export.archive
    code = assemble(template, customizations)
    markup, styles = split_style_block(code)

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as z:
            z.writestr(archive.html_file, markup)
            z.writestr(archive.css_file, styles)
            z.writestr(archive.combined_file, code)
            z.writestr(archive.readme_file, render_readme(template, customizations))
    except (OSError, zipfile.BadZipFile, ValueError) as e:
        raise ExportError(f"Failed to package template {template.id}: {e}") from e
    return buffer.getvalue()


class ExportService:
    @staticmethod
    def copy_code(template: Template, customizations: Customizations) -> CopyResult:
        """Produce the clipboard payload: the full assembled code."""
        try:
            code = assemble(template, customizations)
        except Exception as e:
            log.error(f"Failed to copy code for template {template.id}: {e}")
            return CopyResult(
                code=None,
                notification=notify(
                    NotificationType.ERROR, "Failed to copy code. Please try again."
                ),
            )
        return CopyResult(
            code=code,
            notification=notify(NotificationType.SUCCESS, "Code copied to clipboard!"),
        )

    @staticmethod
    def download_zip(template: Template, customizations: Customizations) -> ArchiveResult:
        """Package the generated code as a zip archive."""
        try:
            content = build_archive_bytes(template, customizations)
        except ExportError as e:
            log.error(str(e))
            return ArchiveResult(
                filename=None,
                content=None,
                notification=notify(
                    NotificationType.ERROR,
                    "Failed to download template. Please try again.",
                ),
            )
        return ArchiveResult(
            filename=archive_filename(template.name),
            content=content,
            notification=notify(
                NotificationType.SUCCESS, "Template downloaded as ZIP file!"
            ),
        )
