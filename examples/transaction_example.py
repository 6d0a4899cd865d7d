#!/usr/bin/env python3
"""
Transfer stock between two warehouses in one server-side transaction.

Expects an ArangoDB server configured through config/default.yaml or
the ARANGO_* environment variables, with collections ``stock`` and
``movements`` in the configured database.
"""

import sys

from arangotx import ArangoTxError, Client, transaction_options, with_wait_for_sync
from arangotx.utils.logging import configure_from_config


def main() -> int:
    client = Client.from_config()
    configure_from_config(client.config)
    
    db = client.database()
    tx = db.begin_transaction(read=["stock"], write=["stock", "movements"])
    
    # Bound parameters are arguments of the action function, so they are
    # used from JavaScript. AQL fragments run without bind variables.
    tx.add_js(
        "var src = db.stock.document(source);"
        "db.stock.update(source, {qty: src.qty - qty});",
        {"source": "warehouse-a", "qty": 5},
    )
    tx.add_js(
        "var dst = db.stock.document(target);"
        "db.stock.update(target, {qty: dst.qty + qty});",
        {"target": "warehouse-b"},
    )
    tx.add_aql("FOR m IN movements FILTER m.archived == true REMOVE m IN movements")
    tx.add_js(
        "db.movements.insert({from: source, to: target, qty: qty});"
        "return db.stock.document(target).qty;"
    )
    
    try:
        with transaction_options(with_wait_for_sync(), lock_timeout=10):
            new_qty = tx.execute(result_type=int)
    except ArangoTxError as e:
        print(f"Transfer failed: {e}")
        return 1
    finally:
        client.close()
    
    print(f"warehouse-b now holds {new_qty}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
