"""
Shared constants for the Google Cloud Storage filesystem adapter.
"""

# 默认存储API地址，get_url 仅在使用该地址时拼接存储桶名称
STORAGE_API_URI_DEFAULT = "https://storage.googleapis.com"

# 路径分隔符
PATH_SEPARATOR = "/"

# 可见性
VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"

# GCS ACL 相关
ALL_USERS_ENTITY = "allUsers"
READER_ROLE = "READER"
PREDEFINED_ACL_PUBLIC = "publicRead"
PREDEFINED_ACL_PRIVATE = "projectPrivate"
