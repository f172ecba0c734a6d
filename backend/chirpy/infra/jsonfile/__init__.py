from .snapshot_file import JSONSnapshotFile

__all__ = ["JSONSnapshotFile"]
