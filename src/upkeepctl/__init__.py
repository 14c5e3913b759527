"""upkeepctl: recurring upkeep tasks tracked in Obsidian frontmatter."""

__version__ = "0.4.0"
