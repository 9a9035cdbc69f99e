"""Login authentication and session assembly."""
