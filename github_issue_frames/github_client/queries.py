"""GitHub GraphQL documents used by the issue search."""

# Issue search with cursor pagination. Only the Issue member of the
# SearchResultItem union is expanded; other members carry just __typename.
SEARCH_ISSUES_QUERY = """
query SearchIssues($query: String!, $first: Int!, $cursor: String) {
  rateLimit {
    limit
    cost
    remaining
    resetAt
  }
  search(query: $query, type: ISSUE, first: $first, after: $cursor) {
    issueCount
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      __typename
      ... on Issue {
        number
        title
        createdAt
        closedAt
        closed
        author {
          ... on User {
            login
            company
          }
        }
        repository {
          name
          owner {
            login
          }
        }
      }
    }
  }
}
"""
