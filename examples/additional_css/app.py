"""Additional CSS -- components contributing to the page head.

The context chain carries a ``tmpData`` dict that lives for one render.
``body`` registers CSS through ``addAdditionalCss`` and the layout reads
it back after the body has been rendered.

Run:
    python app.py
"""

import asyncio

from trex import t_rex_async


async def layout(t):
    title, head, body = await asyncio.gather(t.aio.title(), t.aio.head(), t.aio.body())
    return f"""<!doctype html>
<html lang="en">
<head>
    <title>{title}</title>
    {head}
    <style>{await t.aio.getAdditionalCss()}</style>
</head>
<body>
    {body}
</body>
</html>"""


async def add_additional_css(t, css):
    data = await t.aio.tmpData()
    data.setdefault("additionalCss", []).append(css)


async def get_additional_css(t):
    data = await t.aio.tmpData()
    return "".join(data.get("additionalCss", []))


base_template = {
    "id": "baseTemplate",
    "title": "Title",
    "head": "",
    "body": "",
    "main": layout,
    "addAdditionalCss": add_additional_css,
    "getAdditionalCss": get_additional_css,
}


async def body(t):
    await t.aio.addAdditionalCss("""
body {
    background-color: black;
    color: white;
}
            """)
    return "<p>Hello World</p>"


some_template = {
    "id": "someTemplate",
    "parent": base_template,
    "body": body,
}

local_context = {"id": "localContext"}


def render() -> str:
    context = {"id": "individualContext", "tmpData": {}, "parent": local_context}
    return asyncio.run(t_rex_async(some_template, context))


output = render()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
