"""Terminal output and prompts for devtree."""
