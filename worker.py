#!/usr/bin/env python
"""TaskIQ worker and scheduler entry point."""

# Import broker and tasks to ensure they are registered
from parkit.tasks.broker import broker, scheduler
from parkit.tasks.snapshot_tasks import record_snapshot_task

# TaskIQ CLI uses these when running:
#   taskiq worker worker:broker
#   taskiq scheduler worker:scheduler
