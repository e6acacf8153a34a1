import types

import pytest

from git_auto_commit.commit import CommitMessageGenerator, validate_commit_message
from git_auto_commit.config import Config
from git_auto_commit.exceptions import InvalidFormatError, MissingCredentialError
from git_auto_commit.git import RepositoryStatus
from git_auto_commit.messages import Messages

STATUS = RepositoryStatus(not_added=("loader.py",))


def _fake_client(text):
    calls = []

    def complete(system, user):
        calls.append((system, user))
        return text

    return types.SimpleNamespace(complete=complete, calls=calls)


def test_validate_accepts_feat_and_fix():
    assert validate_commit_message("feat: x") == "feat: x"
    assert validate_commit_message("  fix: 修复登录问题 \n") == "fix: 修复登录问题"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        None,
        "feat:x",
        "feat: ",
        "docs: update readme",
        "chore: bump",
        "feat(core): scoped",
        "Feat: capitalised",
        "add a feature",
        "feat: first line\nsecond line",
    ],
)
def test_validate_rejects_malformed(raw):
    with pytest.raises(InvalidFormatError):
        validate_commit_message(raw)


def test_invalid_format_message_is_localized():
    with pytest.raises(InvalidFormatError) as ei:
        validate_commit_message("nope", Messages("en"))
    assert str(ei.value) == "AI failed to generate a valid commit message: nope"


def test_generator_builds_prompt_and_validates():
    client = _fake_client("  feat: add config loader  ")
    notices = []
    gen = CommitMessageGenerator(
        Config(language="en"), completion_client=client, notify=notices.append
    )

    assert gen.generate(STATUS, "+ def load(): ...") == "feat: add config loader"

    ((system, user),) = client.calls
    assert "loader.py" in user
    assert "+ def load(): ..." in user
    assert "English" in system
    assert notices == ["building_prompt"]


def test_generator_rejects_invalid_completion():
    gen = CommitMessageGenerator(Config(), completion_client=_fake_client("chore: x"))
    with pytest.raises(InvalidFormatError):
        gen.generate(STATUS, "diff")


def test_generator_without_key_fails_before_prompting():
    notices = []
    gen = CommitMessageGenerator(Config(api_key=None), notify=notices.append)
    with pytest.raises(MissingCredentialError):
        gen.generate(STATUS, "diff")
    assert notices == []
