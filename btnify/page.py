"""Render the registry into the single self-contained HTML page.

The page is produced once at bind time and served verbatim; it never
depends on request-time state.  Button names are HTML-escaped, prompt texts
are embedded as double-quoted script literals via `escape_js_string`.
"""

from __future__ import annotations

import html

from btnify.registry import Registry

DEFAULT_TITLE = "BTNify"

# Escapes chosen so the resulting literal is valid in both JavaScript and JSON
# and cannot terminate the surrounding <script> element.
_JS_ESCAPES: dict[int, str] = {
    ord("\\"): "\\\\",
    ord('"'): '\\"',
    ord("'"): "\\u0027",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}
for _code in range(0x20):
    _JS_ESCAPES.setdefault(_code, f"\\u{_code:04x}")
_JS_ESCAPES[0x7F] = "\\u007f"

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
    <head>
        <title>{title}</title>
        <meta charset="utf-8">
    </head>
    <body>
{buttons}
        <button onclick="clickOther()">other</button>

        <script>
            const BUTTON_PROMPTS = [
{prompts}
            ];

            async function clickButton(id) {{
                const prompts = BUTTON_PROMPTS[id] || [];
                const answers = [];
                for (const text of prompts) {{
                    answers.push(prompt(text));
                }}
                await showMessage(id, answers);
            }}

            async function clickOther() {{
                const raw = prompt("enter id");
                if (raw === null) {{
                    return;
                }}
                const id = Number.parseInt(raw, 10);
                if (Number.isNaN(id) || id < 0) {{
                    alert("Unknown button id");
                    return;
                }}
                await clickButton(id);
            }}

            async function showMessage(id, answers) {{
                let text;
                try {{
                    const data = await postData("/", {{ id, answers }});
                    text = data.message;
                }} catch (err) {{
                    text = "Request failed: " + err.message;
                }}
                alert(text);
            }}

            async function postData(url = "/", data = {{}}) {{
                const response = await fetch(url, {{
                    method: "POST",
                    headers: {{
                        "Content-Type": "application/json"
                    }},
                    body: JSON.stringify(data)
                }});
                if (!response.ok) {{
                    throw new Error("server returned HTTP " + response.status);
                }}
                return response.json();
            }}
        </script>
    </body>
</html>
"""


def escape_js_string(text: str) -> str:
    """Return *text* as the body of a double-quoted script string literal."""
    return text.translate(_JS_ESCAPES)


def js_string_literal(text: str) -> str:
    return f'"{escape_js_string(text)}"'


def _button_html(button_id: int, name: str) -> str:
    return f'        <button onclick="clickButton({button_id})">{html.escape(name)}</button>'


def _prompts_js(prompts: tuple[str, ...]) -> str:
    return "                [" + ", ".join(js_string_literal(p) for p in prompts) + "],"


def render_page(registry: Registry, title: str = DEFAULT_TITLE) -> str:
    """Build the page body for *registry*.

    Pure function of its inputs: rendering the same registry twice yields
    identical output.
    """
    buttons = "\n".join(_button_html(idx, b.name) for idx, b in enumerate(registry))
    prompts = "\n".join(_prompts_js(b.prompts) for b in registry)
    return _PAGE_TEMPLATE.format(
        title=html.escape(title),
        buttons=buttons,
        prompts=prompts,
    )
