from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from functools import lru_cache
from typing import Literal, Optional

VALID_OPERATIONS = ("read", "update")


class InputError(ValueError):
    """アクション入力の不備"""

    pass


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # GitHub (Actions runner sets both URLs, GHES included)
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_GRAPHQL_URL: str = ""
    GITHUB_API_TIMEOUT_SECONDS: int = 30
    GITHUB_API_MAX_RETRIES: int = 3

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""
    RUNNER_DEBUG: str = ""

    @field_validator("GITHUB_API_URL", "GITHUB_GRAPHQL_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """末尾のスラッシュを除去"""
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """ログレベル名の正規化（不明な値はINFO）

        設定はimport時に読み込まれるため、ここでは例外を送出しない。
        """
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return level

    @model_validator(mode="after")
    def enable_runner_debug(self) -> "Settings":
        """Actionsのデバッグログ有効時はDEBUGに切り替え"""
        if self.RUNNER_DEBUG == "1":
            self.LOG_LEVEL = "DEBUG"
        return self


class ActionInputs(BaseSettings):
    """ワークフローから渡される生の入力値（INPUT_* 環境変数）"""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    CONTENT_ID: str = ""
    FIELD: str = ""
    PROJECT_NUMBER: str = ""
    ORGANIZATION: str = ""
    OWNER: str = ""
    VALUE: str = ""
    AUTO_ADD: str = ""
    OPERATION: str = ""
    GITHUB_TOKEN: str = ""

    @field_validator("*")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """前後の空白を除去（@actions/coreのgetInputと同じ挙動）"""
        return v.strip()

    def require(self, name: str, required: bool = True) -> str:
        """入力値を取得し、必須なら未指定をエラーにする

        Args:
            name: 入力名（action.ymlの表記）
            required: 必須かどうか

        Returns:
            str: 入力値

        Raises:
            InputError: 必須入力が空の場合
        """
        value = getattr(self, name.upper())
        if required and not value:
            raise InputError(f"Input required and not supplied: {name}")
        return value


class Inputs(BaseModel):
    """検証・正規化済みの入力"""

    model_config = ConfigDict(frozen=True)

    content_id: str
    field_name: str
    project_number: int
    owner: str
    value: str = ""
    auto_add: bool = False
    operation: Literal["read", "update"] = "update"


def parse_project_number(raw: str) -> int:
    """project_numberを整数に変換

    Raises:
        InputError: 整数として解釈できない、または正でない場合
    """
    try:
        number = int(raw)
    except ValueError as e:
        raise InputError(
            f"Invalid value passed for the 'project_number' parameter (passed: {raw})"
        ) from e

    if number <= 0:
        raise InputError(
            f"Invalid value passed for the 'project_number' parameter (passed: {raw})"
        )
    return number


def get_inputs(raw: Optional[ActionInputs] = None) -> Optional[Inputs]:
    """アクション入力を検証・正規化して返す

    operationが不正な場合は失敗を記録してNoneを返す（部分的な入力は返さない）。

    Args:
        raw: 生の入力値（省略時は環境変数から読み込み）

    Returns:
        Optional[Inputs]: 検証済み入力、operationが不正ならNone

    Raises:
        InputError: 必須入力の未指定、またはproject_numberが不正な場合
    """
    from update_project.utils.actions import info, set_failed

    if raw is None:
        raw = ActionInputs()

    operation = raw.OPERATION or "update"
    if operation not in VALID_OPERATIONS:
        set_failed(
            f"Invalid value passed for the 'operation' parameter "
            f"(passed: {operation}, allowed: {', '.join(VALID_OPERATIONS)})"
        )
        return None

    # organization takes precedence over owner
    owner = raw.ORGANIZATION or raw.OWNER
    if not owner:
        raise InputError("Input required and not supplied: organization")

    inputs = Inputs(
        content_id=raw.require("content_id"),
        field_name=raw.require("field"),
        project_number=parse_project_number(raw.require("project_number")),
        owner=owner,
        value=raw.require("value", required=operation == "update"),
        auto_add=raw.AUTO_ADD == "true",
        operation=operation,
    )

    info(f"Inputs: {inputs.model_dump_json()}")

    return inputs


def get_github_token(raw: Optional[ActionInputs] = None) -> str:
    """github_token入力を取得

    Raises:
        InputError: 未指定の場合
    """
    if raw is None:
        raw = ActionInputs()
    return raw.require("github_token")


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()


settings = get_settings()
