"""CBOR Tags — reserved tag numbers shared with the envelope ecosystem.

Invariants:
    - Values are bit-exact with the global tag registry: changing one breaks wire compatibility
    - FUNCTION and PARAMETER discriminate identifier roles; REQUEST and RESPONSE discriminate messages
"""

ENVELOPE = 200
KNOWN_VALUE = 40000
REQUEST = 40004
RESPONSE = 40005
FUNCTION = 40006
PARAMETER = 40007
CID = 40012
