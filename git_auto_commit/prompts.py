"""Prompt construction for commit message generation."""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from .git import RepositoryStatus

logger = logging.getLogger(__name__)

DIFF_LIMIT = 100_000
TRUNCATION_MARKER = "\n... [diff truncated]"

COMMIT_TYPES = ("feat", "fix")


def truncate_diff(diff: str, limit: int = DIFF_LIMIT) -> str:
    """Keep the first ``limit`` characters and append the marker if cut."""
    if len(diff) <= limit:
        return diff
    logger.debug("Truncating diff from %d to %d characters", len(diff), limit)
    return diff[:limit] + TRUNCATION_MARKER


PROMPT_TEMPLATES: Dict[str, Dict[str, str]] = {
    "zh": {
        "system": "\n".join(
            [
                "你是一个Git提交信息生成助手。你需要生成简洁、清晰、符合规范的中文提交信息。",
                "提交信息格式必须是：<type>: <description>",
                "其中type规则：",
                "- feat：用于新增文件或新功能",
                "- fix：用于修复问题或改进现有功能",
                "description必须是中文，使用概括性描述，不要列出具体文件名。",
            ]
        ),
        "user": "\n".join(
            [
                "请为以下Git变更生成提交信息：",
                "",
                "变更状态：",
                "- 新增文件：{added}",
                "- 修改文件：{modified}",
                "- 删除文件：{deleted}",
                "- 重命名文件：{renamed}",
                "",
                "变更内容：",
                "{diff}",
                "",
                "请找出最重要的变更，生成一条简洁的中文提交信息，格式为 <type>: <description>。",
                "type必须是：feat（新功能）/fix（修复）之一。",
                "- 如果涉及新增文件或新功能，使用 feat",
                "- 如果是修复问题或改进现有功能，使用 fix",
                "",
                "要求：",
                "1. 提交信息必须简洁，不超过20个字",
                "2. 不要列出具体的文件名，使用概括性的描述",
                "3. 根据变更内容选择最合适的type",
                "4. 只输出一行提交信息，不要输出其他内容",
            ]
        ),
    },
    "en": {
        "system": "\n".join(
            [
                "You are a Git commit message assistant. Write concise, clear",
                "commit messages in English.",
                "The message format must be: <type>: <description>",
                "Type rules:",
                "- feat: new files or new functionality",
                "- fix: bug fixes or improvements to existing functionality",
                "The description must be in English and summarize the change",
                "without listing file names.",
            ]
        ),
        "user": "\n".join(
            [
                "Generate a commit message for the following Git changes:",
                "",
                "Change status:",
                "- New files: {added}",
                "- Modified files: {modified}",
                "- Deleted files: {deleted}",
                "- Renamed files: {renamed}",
                "",
                "Changes:",
                "{diff}",
                "",
                "Identify the most significant changes and write one concise",
                "English commit message in the format <type>: <description>.",
                "type must be one of: feat (new feature) / fix (fix).",
                "- Use feat when files or features are added",
                "- Use fix when problems are fixed or existing features improved",
                "",
                "Requirements:",
                "1. Keep it short: between 10 and 100 words at most, ideally under 100 characters",
                "2. Do not list file names; describe the change in general terms",
                "3. Pick the type that best fits the changes",
                "4. Output only the single commit message line",
            ]
        ),
    },
}


def _join(paths) -> str:
    return ", ".join(paths)


def build_prompt(status: RepositoryStatus, diff: str, language: str) -> Tuple[str, str]:
    """Return ``(system_text, user_text)`` for the given change set."""
    template = PROMPT_TEMPLATES[language]
    user = template["user"].format(
        added=_join(status.not_added + status.created),
        modified=_join(status.modified),
        deleted=_join(status.deleted),
        renamed=_join(f"{old} -> {new}" for old, new in status.renamed),
        diff=truncate_diff(diff),
    )
    return template["system"], user
