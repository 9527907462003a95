from .volume import Item, Record, VolumeResult

__all__ = ["Item", "Record", "VolumeResult"]
