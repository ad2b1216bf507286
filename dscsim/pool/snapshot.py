from curvesim.pool.snapshot import Snapshot


class ERC20Snapshot(Snapshot):
    """Snapshot that saves ERC20 supply and balances."""

    def __init__(self, balanceOf, totalSupply):
        self.balanceOf = balanceOf
        self.totalSupply = totalSupply

    @classmethod
    def create(cls, erc20):
        balanceOf = erc20.balanceOf.copy()
        totalSupply = erc20.totalSupply
        return cls(balanceOf, totalSupply)

    def restore(self, erc20):
        erc20.balanceOf = self.balanceOf.copy()
        erc20.totalSupply = self.totalSupply


class LedgerSnapshot(Snapshot):
    """Snapshot that saves collateral balances, debt balances and users."""

    def __init__(self, collateral_deposited, dsc_minted, users):
        self.collateral_deposited = collateral_deposited
        self.dsc_minted = dsc_minted
        self.users = users

    @classmethod
    def create(cls, ledger):
        collateral_deposited = ledger.collateral_deposited.copy()
        dsc_minted = ledger.dsc_minted.copy()
        users = ledger.users.copy()
        return cls(collateral_deposited, dsc_minted, users)

    def restore(self, ledger):
        ledger.collateral_deposited = self.collateral_deposited.copy()
        ledger.dsc_minted = self.dsc_minted.copy()
        ledger.users = self.users.copy()


class DSCEngineSnapshot(Snapshot):
    """
    Snapshot that saves the ledger, the stablecoin, every collateral token
    and the length of the event log.
    """

    def __init__(
        self,
        ledger_snapshot,
        dsc_snapshot,
        collateral_snapshots,
        n_events,
    ):
        self.ledger_snapshot = ledger_snapshot
        self.dsc_snapshot = dsc_snapshot
        self.collateral_snapshots = collateral_snapshots
        self.n_events = n_events

    @classmethod
    def create(cls, engine):
        ledger_snapshot = engine.ledger.get_snapshot()
        dsc_snapshot = engine.DSC.get_snapshot()
        collateral_snapshots = {
            address: token.get_snapshot()
            for address, token in engine.collateral_tokens.items()
        }
        n_events = len(engine.events)
        return cls(ledger_snapshot, dsc_snapshot, collateral_snapshots, n_events)

    def restore(self, engine):
        engine.ledger.revert_to_snapshot(self.ledger_snapshot)
        engine.DSC.revert_to_snapshot(self.dsc_snapshot)
        for address, token in engine.collateral_tokens.items():
            token.revert_to_snapshot(self.collateral_snapshots[address])
        del engine.events[self.n_events :]
