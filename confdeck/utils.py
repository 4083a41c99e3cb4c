"""Small text helpers."""


def center_text(text: str, width: int, pad_with: str = " ") -> str:
    """Pad text on both sides to width; any odd padding goes to the right."""
    if len(text) > width:
        raise ValueError("Text to be centered cannot be longer than the width.")
    total = width - len(text)
    left = total // 2
    return f"{pad_with * left}{text}{pad_with * (total - left)}"