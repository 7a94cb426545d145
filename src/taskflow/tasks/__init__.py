"""
Task subsystem.

Components:
- task_models.py: data structures (Task, WorkflowState, Priority, TaskBlob)
- errors.py: failure taxonomy (LockedError, TransitionFailedError, Storage*Error)
- latency.py: injectable latency/fault simulators
- workflow.py: transition table, lock set, async transition attempts
- job_queue.py: FIFO queue running one async job at a time
- task_store.py: blob store (load / save / update_task) over a key-value backend
- task_api.py: TaskBoard, the caller that wires the above together
"""
