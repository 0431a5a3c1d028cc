"""
Use Cases

Organized into domain folders:
- password_reset/: Reset token lifecycle
- admin/: Administrator user management

Import from subdirectories.
"""
