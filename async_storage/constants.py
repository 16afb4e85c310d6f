"""
Constants shared by the async storage provisioning flow.

Names and paths here are part of the rsync-over-SSH contract with the
workspace side: the backup agent connects to ``async-storage:2222`` and
writes under ``/async-storage``.
"""

# =============================================================================
# Workspace attributes
# =============================================================================

ASYNC_PERSIST_ATTRIBUTE = "asyncPersist"
PERSIST_VOLUMES_ATTRIBUTE = "persistVolumes"

# PVC strategy that keeps a single shared claim per namespace
COMMON_STRATEGY = "common"

# =============================================================================
# Labels
# =============================================================================

USER_ID_LABEL = "che.user_id"
APP_LABEL = "app"

# =============================================================================
# Resource names and paths
# =============================================================================

SERVICE_PORT = 2222
SERVICE_PORT_NAME = "rsync-port"
PROTOCOL = "TCP"

# Pod and Service name; rsync addresses the sidecar as async-storage:/{PATH}
ASYNC_STORAGE = "async-storage"
# Appended to the namespace to build the ConfigMap name
ASYNC_STORAGE_CONFIG = "async-storage-config"

AUTHORIZED_KEYS = "authorized_keys"
ASYNC_STORAGE_DATA_PATH = f"/{ASYNC_STORAGE}"
SSH_KEY_PATH = f"/.ssh/{AUTHORIZED_KEYS}"

CONFIG_MAP_VOLUME_NAME = "async-storage-configvolume"
STORAGE_VOLUME_NAME = "async-storage-data"

# Owner read/write only
SSH_KEY_FILE_MODE = 0o600

MEMORY_REQUEST = "256Mi"
MEMORY_LIMIT = "512Mi"

# =============================================================================
# SSH
# =============================================================================

SSH_KEY_NAME = "rsync-via-ssh"
SSH_SCOPE = "internal"

# =============================================================================
# Warning codes
# =============================================================================

INVALID_CONFIGURATION_WARNING_CODE = 4200
NOT_ABLE_TO_PROVISION_SSH_KEYS = 4200
NOT_ABLE_TO_PROVISION_SSH_KEYS_MESSAGE = "Not able to provision SSH keys. {}"
