"""User-facing strings, keyed by message id and indexed by language.

Adding a language means adding one more table to ``MESSAGES``; nothing
else in the package branches on the language code.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_LANGUAGE = "zh"

MESSAGES: Dict[str, Dict[str, str]] = {
    "zh": {
        # progress
        "fetching_status": "正在获取仓库状态...",
        "fetching_diff": "正在获取变更内容...",
        "building_prompt": "正在构建提示信息...",
        "waiting_response": "正在等待 AI 响应...",
        # plan
        "files_header": "\n将要提交的文件：",
        "staged_files": "已暂存的文件：",
        "modified_files": "已修改的文件：",
        "deleted_files": "已删除的文件：",
        "untracked_files": "新增的文件：",
        "generated_message": "\n生成的提交信息：{message}",
        "confirm_prompt": "\n确认提交？(y/n) ",
        # outcomes
        "commit_success": "提交成功！",
        "commit_cancelled": "已取消提交",
        "error_prefix": "错误：",
        # failures
        "not_a_repo": "当前目录不是有效的Git仓库",
        "no_changes": "没有检测到需要提交的变更",
        "no_files": "没有可提交的文件",
        "timeout": "AI 服务响应超时（{seconds:g} 秒），请稍后重试",
        "payload_too_large": (
            "AI服务错误：变更内容过大（{detail}），请减少本次提交的变更后重试"
        ),
        "remote_error": "AI服务错误：{detail}",
        "empty_completion": "AI 未能生成有效的提交信息",
        "invalid_format": "AI 未能生成有效的提交信息：{message}",
        "commit_failed": "提交失败：{detail}",
        "missing_api_key": (
            "请先设置 API 密钥。\n\n"
            "您可以通过以下命令设置 API 密钥：\n"
            "git-auto-commit config set-api-key <your-api-key>\n\n"
            "如果您还没有 API 密钥，可以通过以下步骤获取：\n"
            "1. 访问 https://siliconflow.cn\n"
            "2. 注册/登录您的账号\n"
            "3. 在控制台中创建 API 密钥"
        ),
        # config subcommand
        "config_usage": (
            "使用方法：\n"
            "  git-auto-commit config set-api-key <your-api-key>  设置 API 密钥\n"
            "  git-auto-commit config get-api-key                 获取当前 API 密钥"
        ),
        "api_key_required": "请提供 API 密钥",
        "api_key_saved": "API 密钥已设置",
        "api_key_current": "当前 API 密钥：{api_key}",
        "api_key_unset": "API 密钥未设置",
        "unknown_subcommand": "未知的子命令：{name}",
    },
    "en": {
        "fetching_status": "Fetching repository status...",
        "fetching_diff": "Fetching changes...",
        "building_prompt": "Building prompt...",
        "waiting_response": "Waiting for AI response...",
        "files_header": "\nFiles to be committed:",
        "staged_files": "Staged files:",
        "modified_files": "Modified files:",
        "deleted_files": "Deleted files:",
        "untracked_files": "New files:",
        "generated_message": "\nGenerated commit message: {message}",
        "confirm_prompt": "\nConfirm commit? (y/n) ",
        "commit_success": "Commit successful!",
        "commit_cancelled": "Commit cancelled",
        "error_prefix": "Error: ",
        "not_a_repo": "Current directory is not a valid Git repository",
        "no_changes": "No changes detected to commit",
        "no_files": "No files to commit",
        "timeout": (
            "AI service did not respond within {seconds:g} seconds, "
            "please try again later"
        ),
        "payload_too_large": (
            "AI service error: the change set is too large ({detail}), "
            "please retry with fewer changes"
        ),
        "remote_error": "AI service error: {detail}",
        "empty_completion": "AI failed to generate a valid commit message",
        "invalid_format": "AI failed to generate a valid commit message: {message}",
        "commit_failed": "Commit failed: {detail}",
        "missing_api_key": (
            "Please set an API key first.\n\n"
            "You can set it with:\n"
            "git-auto-commit config set-api-key <your-api-key>\n\n"
            "If you do not have an API key yet:\n"
            "1. Visit https://siliconflow.cn\n"
            "2. Sign up or log in\n"
            "3. Create an API key in the console"
        ),
        "config_usage": (
            "Usage:\n"
            "  git-auto-commit config set-api-key <your-api-key>  Set the API key\n"
            "  git-auto-commit config get-api-key                 Show the API key"
        ),
        "api_key_required": "Please provide an API key",
        "api_key_saved": "API key saved",
        "api_key_current": "Current API key: {api_key}",
        "api_key_unset": "API key is not set",
        "unknown_subcommand": "Unknown subcommand: {name}",
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)


class Messages:
    """Look up localized strings for one language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        if language not in MESSAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        self.language = language
        self._table = MESSAGES[language]

    def get(self, key: str, **params: object) -> str:
        template = self._table[key]
        return template.format(**params) if params else template

    __call__ = get
