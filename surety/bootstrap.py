import logging
from dataclasses import dataclass, field
from typing import Dict, List

from surety.config import ORACLES_COUNT, REGISTRATION_GAS_LIMIT
from surety.errors import LedgerReadError, LedgerWriteError, RegistrationError
from surety.events import OracleIdentity
from surety.registry import OracleRegistry

log = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    owner: str
    fee: int
    registered: List[OracleIdentity] = field(default_factory=list)
    failed: Dict[str, RegistrationError] = field(default_factory=dict)
    operational: bool = None
    authorized: bool = False


class Bootstrap:
    """
    One-shot startup: authorize the app contract on the data contract,
    read the registration fee, then register every oracle in the pool and
    record its indices in the registry.

    accounts[0] is the owner; the next `oracle_count` accounts are oracles.
    An oracle that fails to register is logged and left out of the registry.
    """

    def __init__(self, ledger, registry: OracleRegistry, oracle_count: int = ORACLES_COUNT,
                 gas_limit: int = REGISTRATION_GAS_LIMIT):
        self.ledger = ledger
        self.registry = registry
        self.oracle_count = oracle_count
        self.gas_limit = gas_limit
        self._started = False

    def run(self) -> BootstrapResult:
        if self._started:
            raise RuntimeError("bootstrap already ran")
        self._started = True

        accounts = self.ledger.accounts()
        if not accounts:
            raise RuntimeError("ledger node exposes no accounts")
        owner, pool = accounts[0], accounts[1:1 + self.oracle_count]
        log.info(f"[Bootstrap] {len(accounts)} accounts; owner={owner}, oracle pool={len(pool)}")
        if len(pool) < self.oracle_count:
            log.warning(f"[Bootstrap] Asked for {self.oracle_count} oracles but only {len(pool)} accounts are available")

        operational = self.ledger.call("isOperational", from_identity=owner)
        log.info(f"[Bootstrap] App contract operational: {operational}")

        authorized = self.authorize(owner)

        fee = self.ledger.call("REGISTRATION_FEE")
        log.info(f"[Bootstrap] Registration fee: {fee} wei")

        result = BootstrapResult(owner=owner, fee=fee, operational=operational, authorized=authorized)
        for address in pool:
            try:
                result.registered.append(self.register_oracle(address, fee))
            except RegistrationError as e:
                log.warning(f"[Bootstrap] {e}")
                result.failed[address] = e

        log.info(f"[Bootstrap] Done: {len(result.registered)} registered, {len(result.failed)} failed")
        return result

    def authorize(self, owner: str) -> bool:
        """Grant the app contract caller rights on the data contract (safe to repeat)."""
        try:
            self.ledger.send("authorizeCaller", [self.ledger.app_address], from_identity=owner, contract="data")
        except LedgerWriteError as e:
            log.error(f"[Bootstrap] Error authorizing app contract: {e}")
            return False
        log.info("[Bootstrap] App contract authorized as caller of the data contract")
        return True

    def register_oracle(self, address: str, fee: int) -> OracleIdentity:
        try:
            balance = self.ledger.balance(address)
            if balance < fee:
                raise RegistrationError(address, f"insufficient funds ({balance} < {fee} wei)")
            self.ledger.send("registerOracle", from_identity=address, value=fee, gas_limit=self.gas_limit)
            indices = self.ledger.call("getMyIndexes", from_identity=address)
        except (LedgerReadError, LedgerWriteError) as e:
            raise RegistrationError(address, e) from e

        identity = OracleIdentity(address, tuple(int(i) for i in indices))
        self.registry.register(identity.address, identity.indices)
        log.info(f"[Bootstrap] Oracle registered: {address} indices: {list(identity.indices)}")
        return identity
