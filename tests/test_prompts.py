from git_auto_commit.git import RepositoryStatus
from git_auto_commit.prompts import (
    DIFF_LIMIT,
    TRUNCATION_MARKER,
    build_prompt,
    truncate_diff,
)

STATUS = RepositoryStatus(
    staged=("b.py",),
    modified=("b.py",),
    deleted=("gone.py",),
    renamed=(("old.py", "new.py"),),
    not_added=("a.py",),
)


def test_truncate_diff_keeps_short_text():
    assert truncate_diff("abc") == "abc"
    exact = "x" * DIFF_LIMIT
    assert truncate_diff(exact) == exact


def test_truncate_diff_cuts_at_limit_and_marks():
    diff = "a" * DIFF_LIMIT + "b" * 50
    truncated = truncate_diff(diff)
    assert truncated == "a" * DIFF_LIMIT + TRUNCATION_MARKER
    assert "b" not in truncated


def test_prompt_embeds_truncated_diff_only():
    diff = "a" * (DIFF_LIMIT - 1) + "XYZ" + "c" * 1000
    _, user = build_prompt(STATUS, diff, "en")
    assert diff[:DIFF_LIMIT] + TRUNCATION_MARKER in user
    assert diff[: DIFF_LIMIT + 1] not in user


def test_marker_is_the_same_for_every_language():
    diff = "d" * (DIFF_LIMIT + 10)
    for language in ("zh", "en"):
        _, user = build_prompt(STATUS, diff, language)
        assert user.count(TRUNCATION_MARKER) == 1


def test_chinese_prompt_lists_changes():
    system, user = build_prompt(STATUS, "+ new line", "zh")
    assert "feat" in system and "fix" in system
    assert "中文" in system
    assert "- 新增文件：a.py" in user
    assert "- 修改文件：b.py" in user
    assert "- 删除文件：gone.py" in user
    assert "- 重命名文件：old.py -> new.py" in user
    assert "+ new line" in user
    assert "不超过20个字" in user


def test_english_prompt_lists_changes():
    system, user = build_prompt(STATUS, "+ new line", "en")
    assert "English" in system
    assert "- New files: a.py" in user
    assert "- Renamed files: old.py -> new.py" in user
    assert "<type>: <description>" in user


def test_braces_in_diff_are_left_alone():
    _, user = build_prompt(STATUS, "+ data = {'k': '{v}'}", "en")
    assert "+ data = {'k': '{v}'}" in user
