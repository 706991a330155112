from estate.market.factory import Marketplace, configure_observability, create_marketplace
from estate.market.settlement import SettlementExecutor

__all__ = ["Marketplace", "SettlementExecutor", "configure_observability", "create_marketplace"]
