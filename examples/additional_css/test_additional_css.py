"""Tests for the additional_css example."""

EXPECTED = """<!doctype html>
<html lang="en">
<head>
    <title>Title</title>
    
    <style>
body {
    background-color: black;
    color: white;
}
            </style>
</head>
<body>
    <p>Hello World</p>
</body>
</html>"""


class TestAdditionalCssApp:
    """Verify CSS registered by the body ends up in the head."""

    def test_output(self, example_app) -> None:
        assert example_app.output == EXPECTED

    def test_fresh_data_per_render(self, example_app) -> None:
        assert example_app.render() == EXPECTED
