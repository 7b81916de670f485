"""Module containing constants of the cursor wire format and the watched collections."""

CURSOR_VERSION = "1"
"""CURSOR_VERSION is the only cursor format version this codec encodes and decodes."""

FIELD_SEPARATOR = b"\r"

FIELD_COUNT = 5

OID_LENGTH = 24

MAX_UINT32 = 2**32 - 1

NO_EVENT_OID = "5ea6d3f394c1f5d986e9bd86"
"""NO_EVENT_OID is the well-known object id of the no-event cursor."""

# change-stream collections of the watched resources
HOST_COLLECTION = "cc_HostBase"
HOST_RELATION_COLLECTION = "cc_ModuleHostConfig"
BIZ_COLLECTION = "cc_ApplicationBase"
SET_COLLECTION = "cc_SetBase"
MODULE_COLLECTION = "cc_ModuleBase"
OBJECT_COLLECTION = "cc_ObjectBase"
