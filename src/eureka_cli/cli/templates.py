"""Fixed-width instance table used by `info` and `wait`."""
from __future__ import annotations

from typing import Iterable

from eureka_cli.discovery.protocol import InstanceRecord

# APP NAME 20, STATUS 10, ID 35, IP ADDRESS 18, PORT 18; longer values are cut.
HEADER = "%-20.20s%-10.10s%-35.35s%-18.18s%-18.18s \n" % (
    "APP NAME",
    "STATUS",
    "ID",
    "IP ADDRESS",
    "PORT",
)

ROW = "%-20.20s%-10.10s%-35.35s%-18.18s%d \n"


def render_instances(instances: Iterable[InstanceRecord]) -> str:
    """Header plus one line per instance. Empty input gives the header alone."""
    lines = [HEADER]
    for i in instances:
        lines.append(ROW % (i.app_name, i.status, i.id, i.ip_address, i.port))
    return "".join(lines)
