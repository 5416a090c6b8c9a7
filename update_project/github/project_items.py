from typing import Any, Dict, Optional, Union
from update_project.github.client import GitHubClient
from update_project.github.models import (
    ContentMetadata,
    ContentNotInProject,
    FieldValue,
    ProjectField,
    ProjectFieldSchema,
    ProjectMetadata,
)
from update_project.github.mutations import ADD_TO_PROJECT, build_update_project_field
from update_project.github.queries import GET_CONTENT_METADATA, GET_PROJECT_METADATA
from update_project.utils.actions import info
from update_project.utils.existence import ensure_exists
from update_project.utils.field_types import SINGLE_SELECT, build_field_value_input
from update_project.utils.logger import get_logger

logger = get_logger(__name__)


def _item_matches(node: Dict[str, Any], project_number: int, owner: str) -> bool:
    """Projectアイテムが対象Project（番号と所有者）に一致するか"""
    project = (node or {}).get("project") or {}
    project_owner = project.get("owner") or {}
    return project.get("number") == project_number and project_owner.get("login") == owner


async def fetch_content_metadata(
    client: GitHubClient,
    content_id: str,
    field_name: str,
    project_number: int,
    owner: str,
) -> Optional[Union[ContentMetadata, ContentNotInProject]]:
    """Issue/PRのメタデータを取得

    projectItemsは先頭100件のみ取得するため、100件を超えるProjectに
    所属するIssue/PRは見つからない場合がある。

    Args:
        client: GitHubクライアント
        content_id: Issue/PRのグローバルID
        field_name: 値を読むフィールド名
        project_number: Project番号
        owner: Projectの所有者（Organization/Userのlogin）

    Returns:
        ContentMetadata: Projectに所属している場合
        ContentNotInProject: Issue/PRは存在するがProjectに所属していない場合
        None: Issue/PRが見つからない場合（失敗を記録済み）
    """
    result = await client.execute_query(
        GET_CONTENT_METADATA, {"contentId": content_id, "fieldName": field_name}
    )

    node = result.get("node") or {}
    item_nodes = (node.get("projectItems") or {}).get("nodes") or []

    item = next(
        (n for n in item_nodes if _item_matches(n, project_number, owner)), None
    )
    title = node.get("title")

    if item is None:
        # Issue/PR自体の存在確認
        if not ensure_exists(node.get("id"), "Item", f"ID {content_id}"):
            return None

        info(
            f"Issue/PR {content_id} exists but is not in project {project_number} for {owner}"
        )
        return ContentNotInProject(node_id=node["id"], title=title or "")

    return ContentMetadata(
        item_id=item["id"],
        title=title or "",
        project_number=item["project"]["number"],
        owner_login=item["project"]["owner"]["login"],
        field=FieldValue.from_node(item.get("field")),
    )


async def fetch_project_metadata(
    client: GitHubClient,
    owner: str,
    project_number: int,
    field_name: str,
    value: str,
    operation: str,
) -> Optional[ProjectMetadata]:
    """Projectのメタデータを取得し、フィールドと選択肢を解決

    Args:
        client: GitHubクライアント
        owner: Projectの所有者
        project_number: Project番号
        field_name: フィールド名（大文字小文字を区別して完全一致）
        value: 設定する値（単一選択フィールドの選択肢名）
        operation: "read" または "update"

    Returns:
        Optional[ProjectMetadata]: 解決できなければNone（失敗を記録済み）
    """
    result = await client.execute_query(
        GET_PROJECT_METADATA, {"owner": owner, "projectNumber": project_number}
    )

    project = (result.get("repositoryOwner") or {}).get("projectV2") or {}

    # Projectの存在確認
    if not ensure_exists(
        project.get("id"), "project", f"Number {project_number}, Owner {owner}"
    ):
        return None

    # 共通フィールドを持たないノード（空dict）は除外
    field_nodes = (project.get("fields") or {}).get("nodes") or []
    fields = [ProjectFieldSchema(**f) for f in field_nodes if f and f.get("id")]

    field = next((f for f in fields if f.name == field_name), None)

    # フィールドの存在確認
    if not ensure_exists(
        field.model_dump() if field else None, "Field", f"Name {field_name}"
    ):
        return None

    field_type = field.dataType.lower()
    option = field.find_option(value)

    # 選択肢の存在確認（単一選択フィールドの更新時のみ）
    if field_type == SINGLE_SELECT and operation == "update":
        if not ensure_exists(
            option.model_dump() if option else None, "Option", f"Value {value}"
        ):
            return None

    return ProjectMetadata(
        project_id=project["id"],
        field=ProjectField(
            field_id=field.id,
            field_type=field_type,
            option_id=option.id if option else None,
        ),
    )


async def add_project_item(
    client: GitHubClient, project_id: str, content_id: str
) -> Dict[str, Any]:
    """Issue/PRをProjectに追加

    Args:
        client: GitHubクライアント
        project_id: ProjectのグローバルID
        content_id: Issue/PRのグローバルID

    Returns:
        Dict[str, Any]: mutation結果
    """
    result = await client.execute_query(
        ADD_TO_PROJECT,
        {"projectId": project_id, "contentId": content_id},
        retry=False,
    )
    logger.debug(f"Added item: {result}")
    return result


async def update_field(
    client: GitHubClient,
    project_metadata: ProjectMetadata,
    content_metadata: ContentMetadata,
    value: str,
) -> Dict[str, Any]:
    """Projectアイテムのフィールド値を更新

    Args:
        client: GitHubクライアント
        project_metadata: fetch_project_metadataの結果
        content_metadata: fetch_content_metadataの結果
        value: 設定する値（単一選択フィールドでは無視され、選択肢IDを使う）

    Returns:
        Dict[str, Any]: mutation結果

    Raises:
        InvalidFieldValueError: 数値フィールドに数値でない値を渡した場合
    """
    field_value = build_field_value_input(project_metadata.field, value)

    result = await client.execute_query(
        build_update_project_field(field_value.graphql_type, field_value.input_key),
        {
            "projectId": project_metadata.project_id,
            "itemId": content_metadata.item_id,
            "fieldId": project_metadata.field.field_id,
            "value": field_value.value,
        },
        retry=False,
    )
    return result
