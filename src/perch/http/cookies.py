"""Reading the request ``Cookie`` header."""


def parse_cookies(header: str) -> dict[str, str]:
    """Split a ``Cookie`` header into a name-value dict.

    ``"a=1; b=2"`` gives ``{"a": "1", "b": "2"}``. Fragments without
    ``=`` are dropped and a repeated name keeps its last value.
    """
    pairs = (fragment.partition("=") for fragment in header.split(";") if "=" in fragment)
    return {name.strip(): value.strip() for name, _, value in pairs}
