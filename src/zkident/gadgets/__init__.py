from .bitify import num_to_bits, bits_to_num
from .cmp import enforce_greater_equal
from .commitment import combine
