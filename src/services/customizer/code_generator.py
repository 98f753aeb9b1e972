"""
Placeholder substitution and final code assembly.

Templates carry `{{text.K}}`, `{{color.K}}` and `{{image.K}}` placeholders.
Substitution is literal and global; placeholders without a matching key are
left in the output untouched.
"""

from typing import Mapping

from loguru import logger as log

from src.services.customizer.models import Customizations, Template

# Inline scripts expected verbatim by the embedding host. Do not reformat.
FAQ_SCRIPT = """<script>function initializeFAQInteractions(){document.querySelectorAll('.faq-question-container').forEach(container=>{container.addEventListener('click',()=>{const description=container.querySelector('.faq-description');const icon=container.querySelector('.toggle-icon');document.querySelectorAll('.faq-question-container.active').forEach(activeContainer=>{if(activeContainer!==container){activeContainer.classList.remove('active');activeContainer.querySelector('.faq-description').style.maxHeight="0";activeContainer.querySelector('.faq-description').style.opacity="0";activeContainer.querySelector('.faq-description').style.padding="0 10px";activeContainer.querySelector('.toggle-icon').textContent="+";}});if(container.classList.contains('active')){container.classList.remove('active');description.style.maxHeight="0";description.style.opacity="0";description.style.padding="0 10px";icon.textContent="+";}else{container.classList.add('active');description.style.maxHeight="1000px";description.style.opacity="1";description.style.padding="10px";icon.textContent="x";}});});}initializeFAQInteractions();</script>"""  # noqa: E501

PADDING_SENTINEL = "onlycodezpadingcheckcustomcodeapplied"

PADDING_CHECK_SCRIPT = """<script> document.querySelectorAll('.form-element__content').forEach((element) => {if (element.textContent.includes("onlycodezpadingcheckcustomcodeapplied")) { element.style.setProperty("padding", "0", "important");}});</script>"""  # noqa: E501

# Name of the function FAQ_SCRIPT exposes on the embedded window
FAQ_HOOK_NAME = "initializeFAQInteractions"


def placeholder(namespace: str, key: str) -> str:
    return "{{" + namespace + "." + key + "}}"


def _substitute(source: str, namespace: str, values: Mapping[str, str]) -> str:
    for key, value in values.items():
        source = source.replace(placeholder(namespace, key), value)
    return source


def render_html(template: Template, customizations: Customizations) -> str:
    """Resolve text and image placeholders in the template markup."""
    html = _substitute(template.html_structure, "text", customizations.text)
    return _substitute(html, "image", customizations.images)


def render_css(template: Template, customizations: Customizations) -> str:
    """Resolve color and image placeholders in the template styles."""
    css = _substitute(template.css_structure, "color", customizations.colors)
    return _substitute(css, "image", customizations.images)


def assemble(template: Template, customizations: Customizations) -> str:
    """
    Build the final embeddable code for a template.

    The output is `<style>{css}</style>{html}` followed by the FAQ script and
    the padding check script, which are appended whether or not the template
    uses them.
    """
    html = render_html(template, customizations)
    css = render_css(template, customizations)

    log.debug(
        f"Generated code for template {template.id}: html={len(html)} chars, css={len(css)} chars"
    )

    return f"<style>{css}</style>{html}{FAQ_SCRIPT}{PADDING_CHECK_SCRIPT}"
