"""GraphQL documents used by the GitHub client."""

ISSUE_FEED_QUERY = """
query($owner: String!, $name: String!, $number: Int!, $commentLimit: Int!, $timelineLimit: Int!, $editLimit: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) {
      author { login }
      createdAt
      labels(first: 20) { nodes { name } }

      comments(last: $commentLimit) {
        nodes {
          author { login }
          body
          createdAt
          lastEditedAt
        }
      }

      userContentEdits(last: $editLimit) {
        nodes {
          editor { login }
          editedAt
        }
      }

      timelineItems(itemTypes: [LABELED_EVENT, RENAMED_TITLE_EVENT, REOPENED_EVENT], last: $timelineLimit) {
        nodes {
          __typename
          ... on LabeledEvent {
            createdAt
            actor { login }
            label { name }
          }
          ... on RenamedTitleEvent {
            createdAt
            actor { login }
          }
          ... on ReopenedEvent {
            createdAt
            actor { login }
          }
        }
      }
    }
  }
}
"""
