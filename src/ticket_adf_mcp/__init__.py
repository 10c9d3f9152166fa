"""Convert ticket content between markdown and Atlassian Document Format."""
