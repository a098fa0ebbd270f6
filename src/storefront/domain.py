"""The storefront domain: catalogue, discount codes, accounts and the order ledger.

Aggregates, commands and handlers across the package register themselves on
``storefront``; ``storefront.init()`` discovers them. Settings come from the
``domain.toml`` next to this file, with the ``PROTEAN_ENV`` overlay applied.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

storefront = Domain(name="storefront")
