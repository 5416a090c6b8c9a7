# Issue/PRとProjectアイテム、指定フィールドの値を取得
GET_CONTENT_METADATA = """
fragment ProjectItemFields on ProjectV2Item {
  id
  project {
    number
    owner {
      ... on Organization {
        login
      }
      ... on User {
        login
      }
    }
  }
  field: fieldValueByName(name: $fieldName) {
    ... on ProjectV2ItemFieldSingleSelectValue {
      name
    }
    ... on ProjectV2ItemFieldNumberValue {
      number
    }
    ... on ProjectV2ItemFieldTextValue {
      text
    }
    ... on ProjectV2ItemFieldDateValue {
      date
    }
  }
}

query GetContentMetadata($contentId: ID!, $fieldName: String!) {
  node(id: $contentId) {
    ... on Issue {
      id
      title
      projectItems(first: 100) {
        nodes {
          ...ProjectItemFields
        }
      }
    }
    ... on PullRequest {
      id
      title
      projectItems(first: 100) {
        nodes {
          ...ProjectItemFields
        }
      }
    }
  }
}
"""

# Project IDとフィールド定義（Organization/User両対応）
GET_PROJECT_METADATA = """
query GetProjectMetadata($owner: String!, $projectNumber: Int!) {
  repositoryOwner(login: $owner) {
    ... on ProjectV2Owner {
      projectV2(number: $projectNumber) {
        id
        fields(first: 100) {
          nodes {
            ... on ProjectV2FieldCommon {
              id
              name
              dataType
            }
            ... on ProjectV2SingleSelectField {
              options {
                id
                name
              }
            }
          }
        }
      }
    }
  }
}
"""
