AUTO = "AUTO"
"""
Pass this as the type id when registering a Struct to derive a stable type id from the class's module and qualified name.
Moving or renaming the class changes the derived id, so explicit UUIDs should be preferred for anything persisted.
"""
