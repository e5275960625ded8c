"""Caching -- a user-defined ``cache`` property.

The engine has no built-in cache. ``baseTemplate`` provides one as an
ordinary callable that memoises whatever its provider function returns,
keyed by the caller.

Run:
    python app.py
"""

from trex import t_rex

cache: dict[str, str] = {}
computed: list[str] = []


def cached(t, key, provider_function):
    if key in cache:
        return cache[key]
    content = provider_function()
    computed.append(key)
    cache[key] = content
    return content


base_template = {
    "id": "baseTemplate",
    "cache": cached,
}

some_template = {
    "id": "someTemplate",
    "parent": base_template,
    "someOtherComponent": lambda t, key: t.cache(key, lambda: "someOtherComponent"),
    "someComponent": lambda t, key: t.cache(key, lambda: "someComponent"),
    "main": lambda t: " ".join([
        t.someComponent("alpha"),
        t.someOtherComponent("alpha"),
        t.someOtherComponent("beta"),
        t.someComponent("beta"),
    ]),
}

output = t_rex(some_template)


def main() -> None:
    print(output)
    print(f"computed: {computed}")


if __name__ == "__main__":
    main()
