from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Literal, Optional, Union

# fieldValueByNameの各フラグメントが返すキー
FIELD_VALUE_KINDS = ("name", "number", "text", "date")


class FieldValue(BaseModel):
    """Projectアイテムのフィールド値（サーバーが埋めた分岐のみ）"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["name", "number", "text", "date"]
    value: Union[int, float, str]

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["FieldValue"]:
        """GraphQLのフィールド値ノードから変換

        Args:
            node: fieldValueByNameの結果（未設定ならNoneまたは空dict）

        Returns:
            Optional[FieldValue]: 値が設定されていればFieldValue
        """
        if not node:
            return None

        for kind in FIELD_VALUE_KINDS:
            if node.get(kind) is not None:
                return cls(kind=kind, value=node[kind])
        return None


class ContentMetadata(BaseModel):
    """Projectに所属しているIssue/PRのメタデータ"""

    model_config = ConfigDict(frozen=True)

    item_id: str  # ProjectV2ItemのID（Issue/PR自体のIDではない）
    title: str
    project_number: int
    owner_login: str
    field: Optional[FieldValue] = None

    @property
    def field_value(self) -> Optional[Union[int, float, str]]:
        return self.field.value if self.field else None


class ContentNotInProject(BaseModel):
    """存在するがProjectに所属していないIssue/PR"""

    model_config = ConfigDict(frozen=True)

    node_id: str
    title: str


class FieldOption(BaseModel):
    """単一選択フィールドの選択肢"""

    id: str
    name: str


class ProjectFieldSchema(BaseModel):
    """Projectのフィールド定義"""

    id: str
    name: str
    dataType: str
    options: List[FieldOption] = []

    def find_option(self, name: str) -> Optional[FieldOption]:
        """名前が完全一致する最初の選択肢を返す"""
        return next((o for o in self.options if o.name == name), None)


class ProjectField(BaseModel):
    """解決済みのフィールド"""

    model_config = ConfigDict(frozen=True)

    field_id: str
    field_type: str  # 小文字化したdataType
    option_id: Optional[str] = None


class ProjectMetadata(BaseModel):
    """解決済みのProject"""

    model_config = ConfigDict(frozen=True)

    project_id: str
    field: ProjectField
