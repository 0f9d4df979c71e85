from typing import List


def read_addresses(file_path: str) -> List[str]:
    """Return the non-blank, whitespace-trimmed lines of an address file, in file order.

    Address format is not checked here; a malformed entry fails later as a
    per-transaction error. OSError from opening, and UnicodeDecodeError from a
    file that is not UTF-8, propagate.
    """
    addresses = []
    with open(file_path, 'r', encoding='utf-8') as file:
        for line in file:
            address = line.strip()
            if address:
                addresses.append(address)
    return addresses
