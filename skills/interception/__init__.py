"""Browser request interception skill."""
