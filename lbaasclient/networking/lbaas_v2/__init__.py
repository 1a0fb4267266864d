"""Load Balancer as a Service (LBaaS) v2 resources.

Each family lives in its own module with the same shape: record types, a
page class for list traversal, ``list_*`` returning a ``Pager`` and
``create``/``get``/``update``/``delete`` returning result envelopes.
"""

from . import listeners, loadbalancers, pools

__all__ = ["listeners", "loadbalancers", "pools"]
