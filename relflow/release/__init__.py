"""Release bounded context.

- model / errors: bump levels, steps, request and run state
- recommend: bump recommendation and resolution
- invoker: the side-effect boundary (live or dry run)
- toolchain: adapters for the external release collaborators
- interaction: operator prompts
- orchestrator: the step state machine
"""

from __future__ import annotations
