"""Page layout -- template inheritance, context data and iteration.

``myTemplate`` extends ``myParentTemplate`` through ``parent``; the
context chain supplies the page data. The nav is rendered with
``t.iterate()``, one ``navItemBlock`` call per item.

Run:
    python app.py
"""

import asyncio

from trex import Engine


async def layout(t):
    return f"""<!doctype html>
<html lang="en">
<head>
    <title>{await t.aio.title()}</title>
    {await t.aio.head()}
</head>
<body>
    {await t.aio.nav()}
    <h1>{await t.aio.title()}</h1>
    {await t.aio.content()}
</body>
</html>"""


parent_template = {
    "id": "myParentTemplate",
    "parent": None,
    "main": layout,
    "head": lambda t: "<script>let that, be, empty</script>",
}


async def nav(t):
    items = await t.aio.iterate("navItemBlock", await t.aio.navItems())
    return f"""
    <nav>{"".join(items)}
    </nav>"""


async def nav_item_block(t, value, index, items):
    return f"""
        <a href="{value["href"]}">({index}) {value["content"]}</a>"""


rendered_template = {
    "id": "myTemplate",
    "parent": parent_template,
    "nav": nav,
    "navItemBlock": nav_item_block,
}

context = {
    "id": "myContext",
    "content": "<p>some content</p>",
    "title": "Hello World",
    "navItems": [
        {"href": "https://hello.com", "content": "hugs to you"},
        {"href": "https://world.com", "content": "global issues"},
    ],
}

engine = Engine(rendered_template, context)
output = asyncio.run(engine.render_async())


def main() -> None:
    print(output)
    print()
    print(asyncio.run(engine.render_async(debug_marks=True)))


if __name__ == "__main__":
    main()
