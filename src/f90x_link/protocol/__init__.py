"""Protocol layer: packet framing, checksum, command encoding and fixed responses."""

from .framing import DataPacket, deserialize, serialize
from .commands import Opcode, encode
from .responses import OK_RESPONSE, UNIT_INQUIRY_RESPONSE
