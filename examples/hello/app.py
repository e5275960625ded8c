"""Hello World -- the simplest t-rex example.

One template provider with a callable entrypoint and two plain values.

Run:
    python app.py
"""

import asyncio

from trex import t_rex, t_rex_async

template = {
    "id": "myRootTemplate",
    "main": lambda t: t.hello() + " " + t.world(),
    "hello": "Hello",
    "world": "world!",
}

output = t_rex(template)


async def async_main(t):
    return await t.aio.hello() + " " + await t.aio.world()


async_template = {**template, "id": "myAsyncTemplate", "main": async_main}


def main() -> None:
    print(output)
    print(asyncio.run(t_rex_async(async_template)))

    # The context chain overrides template values
    print(t_rex(template, {"id": "greeting", "hello": "Goodbye"}))


if __name__ == "__main__":
    main()
