from __future__ import annotations

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount

from estate.config import EstateSettings
from estate.ledger import BalanceLedger
from estate.market import Marketplace, create_marketplace
from estate.models.domain import SigningDomain

from tests.fakes import STARTING_BALANCE, FixedClock


_LISTER_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
_BUYER_KEY = "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a"
_OTHER_KEY = "0x7c852118294e51e653712a81e05800f419141751be58f605c371e15141b007a6"


@pytest.fixture
def lister() -> LocalAccount:
    return Account.from_key(_LISTER_KEY)


@pytest.fixture
def buyer() -> LocalAccount:
    return Account.from_key(_BUYER_KEY)


@pytest.fixture
def other() -> LocalAccount:
    return Account.from_key(_OTHER_KEY)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def settings() -> EstateSettings:
    return EstateSettings()


@pytest.fixture
def domain(settings: EstateSettings) -> SigningDomain:
    return settings.domain.signing_domain()


@pytest.fixture
def market(
    settings: EstateSettings,
    clock: FixedClock,
    lister: LocalAccount,
    buyer: LocalAccount,
    other: LocalAccount,
) -> Marketplace:
    funds = BalanceLedger(
        {
            lister.address: STARTING_BALANCE,
            buyer.address: STARTING_BALANCE,
            other.address: STARTING_BALANCE,
        }
    )
    return create_marketplace(settings, funds=funds, clock=clock)
