import math
import shutil
from typing import Iterable

red = 1
green = 2
blue = 3
gray = 4

ansi_codes = {
    red: "\033[31m",
    green: "\033[32m",
    blue: "\033[36m",
    gray: "\033[90m",
}
reset = "\033[0m"

gradient_colors = (196, 202, 208, 214, 220, 226, 190, 154, 118, 82, 46)

def colored(text: str, color: int = 0) -> str:
    """color is one of the named colors above, or a 256-color palette
    number such as those returned by color_scale(). 0 leaves the text as
    it is."""
    if not color:
        return text
    code = ansi_codes.get(color, f"\033[38;5;{color}m")
    return code + text + reset

def color_scale(worst, best, target, exclude_zeros = False):
    if exclude_zeros and not target: return gray
    if best == worst:
        if target > best: return gradient_colors[-1]
        elif target < best: return gradient_colors[0]
        else: return gradient_colors[int(len(gradient_colors)/2)]
    fraction = (target-worst) / (best-worst)
    if fraction < 0:
        fraction = 0
    elif fraction >= 1.0:
        fraction = 0.999
    i = int(len(gradient_colors)*fraction)
    return gradient_colors[i]

def format_number(number: float, precision: int = 0) -> str:
    return f"{number:,.{precision}f}"

def percentage(dividend: float, divisor: float, precision: int = 2) -> str:
    if not divisor:
        return f"{0:.{precision}%}"
    return f"{dividend / divisor:.{precision}%}"

def bar(count: float, total: float, width: int) -> str:
    """A horizontal bar like |-----o     | with the marker at count/total."""
    if total <= 0 or width <= 0:
        return "|" + " " * max(width, 0) + "|"
    fill = math.floor(min(count / total, 1.0) * width)
    return "|" + "-" * fill + "o" + " " * (width - fill) + "|"

def histogram(rows: Iterable[tuple[str, float]], total: float,
              width: int = None) -> list[str]:
    """One line per (label, count): the label, the share of total, and a
    bar scaled to fit the terminal."""
    rows = list(rows)
    if not rows:
        return []
    if width is None:
        width = shutil.get_terminal_size().columns
    label_width = max(len(label) for label, _ in rows)
    bar_width = max(width - label_width - 14, 10)
    return [
        f"{label:<{label_width}}  {percentage(count, total):>8}  "
        + bar(count, total, bar_width)
        for label, count in rows
    ]

def heading(text: str, width: int = 80) -> str:
    return "\n" + text + "\n" + "-" * min(len(text), width)
