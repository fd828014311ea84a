import logging
import threading

from web3 import Web3

from .errors import InvalidIdentity, NotAuthority, NotReader

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def caller_address(account):
    """Checksum address of a caller, or None when it is not an address.

    A caller that is not an address holds no role.
    """
    account = getattr(account, "address", account)
    if not isinstance(account, str) or not Web3.is_address(account):
        return None
    return Web3.to_checksum_address(account)


def to_address(account):
    """Checksum address for an account, or anything carrying an `.address`."""
    address = caller_address(account)
    if address is None:
        raise InvalidIdentity(f"{account!r}")
    return address


class Authorizations:
    """Role registry: authorities may reconfigure, readers may query.

    Passed to the controller at construction; several controllers may share one.
    """

    def __init__(self, authorities=(), readers=(), all_reader_toggle=0):
        self._lock = threading.RLock()
        self._authorities = {to_address(a) for a in authorities}
        self._readers = {to_address(r) for r in readers}
        self.all_reader_toggle = all_reader_toggle

    def is_authority(self, account):
        address = caller_address(account)
        with self._lock:
            return address is not None and address in self._authorities

    def is_reader(self, account):
        with self._lock:
            if self.all_reader_toggle:
                return True
            address = caller_address(account)
            return address is not None and address in self._readers

    def require_authority(self, account):
        if not self.is_authority(account):
            raise NotAuthority(f"{account}")

    def require_reader(self, account):
        if not self.is_reader(account):
            raise NotReader(f"{account}")

    def add_authority(self, account):
        address = to_address(account)
        with self._lock:
            self._authorities.add(address)
        logger.info("AddAuthority %s", address)

    def remove_authority(self, account):
        address = to_address(account)
        with self._lock:
            self._authorities.discard(address)
        logger.info("RemoveAuthority %s", address)

    def add_reader(self, account):
        address = to_address(account)
        with self._lock:
            self._readers.add(address)
        logger.info("AddReader %s", address)

    def remove_reader(self, account):
        address = to_address(account)
        with self._lock:
            self._readers.discard(address)
        logger.info("RemoveReader %s", address)

    # 1/0 like the on-chain role maps
    def authorities(self, account):
        return int(self.is_authority(account))

    def readers(self, account):
        with self._lock:
            address = caller_address(account)
            return int(address is not None and address in self._readers)
