def removesuffix(text, suffix):
    """Backport of python 3.9 str.removesuffix"""

    if suffix and text.endswith(suffix):
        return text[: -len(suffix)]
    return text
