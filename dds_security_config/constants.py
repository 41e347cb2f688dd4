# Security artifact file names expected in a security root directory
IDENTITY_CA_CERT_FILE_NAME = "identity_ca.cert.pem"
PERMISSIONS_CA_CERT_FILE_NAME = "permissions_ca.cert.pem"
GOVERNANCE_FILE_NAME = "governance.p7s"
CERT_FILE_NAME = "cert.pem"
KEY_FILE_NAME = "key.pem"
PERMISSIONS_FILE_NAME = "permissions.p7s"
LOGGING_FILE_NAME = "logging.xml"

FILE_URI_PREFIX = "file://"

# Authentication plugin properties
AUTH_PLUGIN_PROPERTY_NAME = "dds.sec.auth.plugin"
AUTH_PLUGIN = "builtin.PKI-DH"
IDENTITY_CA_PROPERTY_NAME = "dds.sec.auth.builtin.PKI-DH.identity_ca"
IDENTITY_CERTIFICATE_PROPERTY_NAME = "dds.sec.auth.builtin.PKI-DH.identity_certificate"
PRIVATE_KEY_PROPERTY_NAME = "dds.sec.auth.builtin.PKI-DH.private_key"

# Cryptographic plugin properties
CRYPTO_PLUGIN_PROPERTY_NAME = "dds.sec.crypto.plugin"
CRYPTO_PLUGIN = "builtin.AES-GCM-GMAC"

# Access control plugin properties
ACCESS_PLUGIN_PROPERTY_NAME = "dds.sec.access.plugin"
ACCESS_PLUGIN = "builtin.Access-Permissions"
PERMISSIONS_CA_PROPERTY_NAME = "dds.sec.access.builtin.Access-Permissions.permissions_ca"
GOVERNANCE_PROPERTY_NAME = "dds.sec.access.builtin.Access-Permissions.governance"
PERMISSIONS_PROPERTY_NAME = "dds.sec.access.builtin.Access-Permissions.permissions"

# Logging plugin properties
LOGGING_PLUGIN_PROPERTY_NAME = "dds.sec.log.plugin"
LOGGING_PLUGIN = "builtin.DDS_LogTopic"
LOG_FILE_PROPERTY_NAME = "dds.sec.log.builtin.DDS_LogTopic.log_file"
VERBOSITY_PROPERTY_NAME = "dds.sec.log.builtin.DDS_LogTopic.event_log_level"
# Older plugin releases read the verbosity from this name instead.
LEGACY_VERBOSITY_PROPERTY_NAME = "dds.sec.log.builtin.DDS_LogTopic.logging_level"
DISTRIBUTE_ENABLE_PROPERTY_NAME = "dds.sec.log.builtin.DDS_LogTopic.distribute"
DISTRIBUTE_DEPTH_PROPERTY_NAME = (
    "com.rti.serv.secure.logging.distribute.writer_history_depth"
)

# Logging descriptor layout
SECURITY_LOG_ROOT_TAG = "security_log"
FILE_TAG = "file"
VERBOSITY_TAG = "verbosity"
DISTRIBUTE_TAG = "distribute"
QOS_TAG = "qos"
PROFILE_TAG = "profile"
DEPTH_TAG = "depth"

# Environment variables read by the CLI
SECURITY_ROOT_DIRECTORY_ENV = "SECURITY_ROOT_DIRECTORY"
SECURITY_STRATEGY_ENV = "SECURITY_STRATEGY"
SECURITY_STRATEGY_ENFORCE = "Enforce"
