import json
from typing import Any
from update_project.utils.actions import info, set_failed


def ensure_exists(returned_value: Any, label: str, identifier: str) -> bool:
    """取得した値が存在するか確認

    Args:
        returned_value: 確認する値
        label: エラーメッセージに使うラベル
        identifier: エラーメッセージに使う識別子

    Returns:
        bool: 存在すればTrue、存在しなければ失敗を記録してFalse
    """
    if returned_value is None:
        set_failed(f"{label} not found with {identifier}")
        return False

    info(f"Found {label}: {json.dumps(returned_value, default=str)}")
    return True
