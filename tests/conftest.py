#! /usr/bin/python3
import logging
import pytest
import lnchannel
from typing import Any


def pytest_addoption(parser: Any) -> None:
    parser.addoption("--sort-funding-keys", action="store_true", default=False,
                     help="sort funding multisig keys lexicographically")
    parser.addoption("--anchor-outputs", action="store_true", default=False,
                     help="build HTLC scripts and sequences for option_anchor_outputs")


@pytest.fixture()
def factory(pytestconfig: Any) -> lnchannel.ChannelTxFactory:
    if pytestconfig.getoption("verbose"):
        logging.getLogger("lnchannel").setLevel(logging.DEBUG)
    return lnchannel.ChannelTxFactory(sort_funding_keys=pytestconfig.getoption("sort_funding_keys"),
                                      option_anchor_outputs=pytestconfig.getoption("anchor_outputs"))
