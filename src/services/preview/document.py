"""Full document written into the isolated preview surface."""

CONTENT_WRAPPER_CLASS = "content-wrapper"
LOADING_CLASS = "loading"

PREVIEW_STYLES = """
      /* Smooth transition styles */
      * {
        transition: all 0.2s ease-in-out;
      }
      body {
        opacity: 1;
        transition: opacity 0.25s ease-in-out;
        margin: 0;
        padding: 0;
        overflow: hidden;
        display: flex;
        justify-content: center;
        align-items: center;
        width: 100%;
        height: 100vh;
      }
      body.loading {
        opacity: 0.7;
      }
      /* Container for content scaling */
      .content-wrapper {
        transform: scale(0.9);
        transform-origin: center center;
        max-width: 100%;
        max-height: 100%;
      }
      /* Hide scrollbars but allow scrolling */
      ::-webkit-scrollbar {
        display: none;
      }
      * {
        -ms-overflow-style: none;
        scrollbar-width: none;
      }
"""

# Runs inside the preview window; shrinks the wrapper when content overflows.
FIT_SCRIPT = """
      window.addEventListener('load', function() {
        document.body.classList.remove('loading');
        const content = document.querySelector('.content-wrapper');
        const contentWidth = content.scrollWidth;
        const contentHeight = content.scrollHeight;
        const windowWidth = window.innerWidth;
        const windowHeight = window.innerHeight;
        if (contentWidth > windowWidth || contentHeight > windowHeight) {
          const scaleWidth = windowWidth / contentWidth * 0.9;
          const scaleHeight = windowHeight / contentHeight * 0.9;
          const scale = Math.min(scaleWidth, scaleHeight);
          content.style.transform = 'scale(' + scale + ')';
        }
      });
"""


def build_preview_document(final_code: str) -> str:
    """Wrap assembled template code in the standalone preview page."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"    <style>{PREVIEW_STYLES}    </style>\n"
        "  </head>\n"
        f'  <body class="{LOADING_CLASS}">\n'
        f'    <div class="{CONTENT_WRAPPER_CLASS}">\n'
        f"      {final_code}\n"
        "    </div>\n"
        f"    <script>{FIT_SCRIPT}    </script>\n"
        "  </body>\n"
        "</html>\n"
    )
