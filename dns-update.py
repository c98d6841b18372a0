#!/usr/bin/env python3
"""
DNS-UPDATE - Dynamic DNS record updater

Launcher for running from a checkout. Reads config.json from this
directory unless --config or $DNS_UPDATE_CONFIG says otherwise.

License: MIT
"""

from dns_update.cli import run

if __name__ == "__main__":
    run()
