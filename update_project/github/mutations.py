# Projectに追加
ADD_TO_PROJECT = """
mutation AddToProject($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {
    projectId: $projectId
    contentId: $contentId
  }) {
    item {
      id
    }
  }
}
"""

# Custom fieldを更新（値の型とキーはフィールド種別で決まる）
UPDATE_PROJECT_FIELD_TEMPLATE = """
mutation UpdateField($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: {graphql_type}) {{
  updateProjectV2ItemFieldValue(input: {{
    projectId: $projectId
    itemId: $itemId
    fieldId: $fieldId
    value: {{
      {input_key}: $value
    }}
  }}) {{
    projectV2Item {{
      id
    }}
  }}
}}
"""


def build_update_project_field(graphql_type: str, input_key: str) -> str:
    """フィールド更新mutationを組み立てる

    Args:
        graphql_type: $valueのGraphQLスカラー型（String/Float/Date）
        input_key: ProjectV2FieldValueのキー（singleSelectOptionId/text/number/date）

    Returns:
        str: mutation文字列
    """
    return UPDATE_PROJECT_FIELD_TEMPLATE.format(
        graphql_type=graphql_type, input_key=input_key
    )
