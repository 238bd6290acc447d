import gui_util

def test_format_number():
    assert gui_util.format_number(1234567) == "1,234,567"
    assert gui_util.format_number(1234.5678, 2) == "1,234.57"

def test_percentage():
    assert gui_util.percentage(1, 4) == "25.00%"
    assert gui_util.percentage(1, 0) == "0.00%"

def test_colored():
    assert gui_util.colored("x") == "x"
    assert gui_util.colored("x", gui_util.red) == "\033[31mx\033[0m"
    assert gui_util.colored("x", 46) == "\033[38;5;46mx\033[0m"

def test_color_scale():
    assert gui_util.color_scale(0, 10, 10) == gui_util.gradient_colors[-1]
    assert gui_util.color_scale(0, 10, 0) == gui_util.gradient_colors[0]
    assert gui_util.color_scale(0, 10, 0, exclude_zeros=True) == gui_util.gray

def test_bar():
    assert gui_util.bar(5, 10, 10) == "|-----o     |"
    assert gui_util.bar(0, 0, 4) == "|    |"

def test_histogram():
    lines = gui_util.histogram([("a", 1), ("bb", 3)], 4, width=40)
    assert len(lines) == 2
    assert lines[0].startswith("a     25.00%")
    assert gui_util.histogram([], 0) == []

def test_heading():
    assert gui_util.heading("Rows") == "\nRows\n----"
