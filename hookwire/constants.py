# Section name used for overrides in ini config files
CONFIG_SECTION = "HOOKWIRE"

# Name used for the per-user log folder
LOG_FOLDER_NAME = "hookwire"

# Attribute set on functions marked by the class-level decorators
HOOKS_ATTRIBUTE = "__hookwire_hooks__"
