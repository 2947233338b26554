"""Client for exporting pages from and importing pages into Cosense projects"""

from cosense_sync.ingestion.cosense_client import CosenseClient

__all__ = ["CosenseClient"]
