from minup.blocks import reassemble


def test_single_paragraph() -> None:
    assert reassemble('<p>one</p>') == '<p>one</p>'

def test_line_break() -> None:
    assert reassemble('<p>one\ntwo</p>') == '<p>one<br>two</p>'

def test_paragraph_break() -> None:
    assert reassemble('<p>one\n\ntwo</p>') == '<p>one</p><p>two</p>'

def test_blank_line_runs_make_one_break() -> None:
    assert reassemble('<p>one\n\n\n\ntwo\nthree</p>') == '<p>one</p><p>two<br>three</p>'

def test_placeholders_are_restored_last() -> None:
    assert reassemble('<p><pre><code>x\\\\\\\\y</code></pre></p>') == (
        '<p><pre><code>x\n\ny</code></pre></p>')

def test_placeholders_next_to_real_newlines() -> None:
    assert reassemble('<p>a\\\\b\nc</p>') == '<p>a\nb<br>c</p>'
