from typing import Optional, Union
from pydantic import BaseModel, ConfigDict
from update_project.config import Inputs
from update_project.github.client import GitHubClient
from update_project.github.models import ContentMetadata, ContentNotInProject
from update_project.github.project_items import (
    add_project_item,
    fetch_content_metadata,
    fetch_project_metadata,
    update_field,
)
from update_project.utils.actions import info, set_failed, set_output
from update_project.utils.logger import get_logger

logger = get_logger(__name__)


class RunResult(BaseModel):
    """実行結果（アクションの出力値）"""

    model_config = ConfigDict(frozen=True)

    field_read_value: Optional[Union[int, float, str]] = None
    field_updated_value: Optional[Union[int, float, str]] = None


async def _resolve_content(
    client: GitHubClient, inputs: Inputs
) -> Optional[Union[ContentMetadata, ContentNotInProject]]:
    return await fetch_content_metadata(
        client,
        inputs.content_id,
        inputs.field_name,
        inputs.project_number,
        inputs.owner,
    )


async def run(client: GitHubClient, inputs: Optional[Inputs]) -> Optional[RunResult]:
    """指定フィールドを読み取り、または更新する

    いずれかの解決に失敗した時点で失敗を記録済みのまま終了し、Noneを返す。

    Args:
        client: GitHubクライアント
        inputs: 検証済み入力（入力が不正な場合はNone）

    Returns:
        Optional[RunResult]: 出力した値、途中で終了した場合はNone
    """
    if inputs is None:
        return None

    content_metadata = await _resolve_content(client, inputs)

    # Projectに未追加でauto_addが有効なら追加してから再取得
    if isinstance(content_metadata, ContentNotInProject) and inputs.auto_add:
        info(f"Auto-adding item {inputs.content_id} to project {inputs.project_number}")

        project_metadata = await fetch_project_metadata(
            client,
            inputs.owner,
            inputs.project_number,
            inputs.field_name,
            inputs.value,
            inputs.operation,
        )
        if project_metadata is None:
            return None

        await add_project_item(client, project_metadata.project_id, content_metadata.node_id)

        content_metadata = await _resolve_content(client, inputs)

    if isinstance(content_metadata, ContentNotInProject):
        set_failed(
            f"Item {inputs.content_id} is not in project {inputs.project_number} for {inputs.owner}"
        )
        return None

    if content_metadata is None:
        return None

    project_metadata = await fetch_project_metadata(
        client,
        inputs.owner,
        inputs.project_number,
        inputs.field_name,
        inputs.value,
        inputs.operation,
    )
    if project_metadata is None:
        return None

    read_value = content_metadata.field_value
    set_output("field_read_value", read_value)

    if inputs.operation == "update":
        await update_field(client, project_metadata, content_metadata, inputs.value)
        set_output("field_updated_value", inputs.value)
        info(
            f"Updated field {inputs.field_name} on {content_metadata.title} to {inputs.value}"
        )
        return RunResult(field_read_value=read_value, field_updated_value=inputs.value)

    # readでは同じ値を両方の出力に設定する
    set_output("field_updated_value", read_value)
    return RunResult(field_read_value=read_value, field_updated_value=read_value)
