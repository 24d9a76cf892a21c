"""Services for devtree."""
