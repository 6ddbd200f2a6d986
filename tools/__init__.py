"""Pure helpers computing and formatting budget figures."""
