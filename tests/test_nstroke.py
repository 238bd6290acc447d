import nstroke

def categories(qwerty, ngram):
    return nstroke.tristroke_categories(qwerty.to_nstroke(ngram))

def test_rolls(qwerty):
    assert categories(qwerty, "sdf") == ("roll.in", "roll.in")
    assert categories(qwerty, "fds") == ("roll.out", "roll.out")
    assert categories(qwerty, "lkj") == ("roll.in", "roll.in")

def test_other_categories(qwerty):
    assert categories(qwerty, "fjf") == ("alt", "alt")
    assert categories(qwerty, "ffr") == ("sfr", "sfb")
    assert categories(qwerty, "dec") == ("sfb", "sfb")

def test_bistrokes(qwerty):
    pairs = list(nstroke.bistrokes(qwerty.to_nstroke("the")))
    assert [pair.indices for pair in pairs] == [(33, 48), (48, 31)]

def test_column(qwerty):
    keys = qwerty.board.keys
    fingers = qwerty.fingermap.fingers
    # left control and left option share a column on the bottom row
    assert nstroke.bifinger_category(
        (fingers[68], fingers[69]), (keys[68], keys[69])) == "column"
