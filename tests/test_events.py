import pytest

from rustico.events import KeyEvent, KeyKind, Prompt, PromptResult
from rustico.sizing import SizedParagraph


@pytest.mark.parametrize("code", ["q", "n", "c", "esc"])
def test_cancel_keys(code):
    assert Prompt(None).input(KeyEvent(code)) is PromptResult.CANCEL


@pytest.mark.parametrize("code", ["enter", "y", "j", " "])
def test_ok_keys(code):
    assert Prompt(None).input(KeyEvent(code)) is PromptResult.OK


def test_other_key_does_nothing():
    assert Prompt(None).input(KeyEvent("x")) is PromptResult.NONE


def test_release_is_ignored():
    event = KeyEvent("y", kind=KeyKind.RELEASE)
    assert Prompt(None).input(event) is PromptResult.NONE


def test_non_key_event_is_ignored():
    assert Prompt(None).input(object()) is PromptResult.NONE


def test_default_kind_is_press():
    assert KeyEvent("a").is_press
    assert not KeyEvent("a", kind=KeyKind.REPEAT).is_press


def test_prompt_forwards_size():
    text = "do you want to exit? (y/n)"
    prompt = Prompt(SizedParagraph(text))
    assert prompt.width() == SizedParagraph(text).width()
    assert prompt.height() == SizedParagraph(text).height()