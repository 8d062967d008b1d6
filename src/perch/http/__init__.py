"""HTTP primitives: requests, responses, headers, query strings, cookies."""
