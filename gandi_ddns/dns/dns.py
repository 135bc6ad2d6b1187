from .types import RecordTypeT, RecordValuesT


class DNSClient:
    """
    abstract class for dns client
    """

    async def get_record(
        self, domain: str, name: str, record_type: RecordTypeT
    ) -> RecordValuesT:
        """
        Get the values currently stored for one record.

        Returns:
            The stored values in provider order, or None if the record does not exist
        """
        ...

    async def update_record(
        self, domain: str, name: str, record_type: RecordTypeT, value: str
    ) -> bool:
        """
        Replace every value of one record with a single new value.

        Returns:
            True if the provider reports the record as replaced
        """
        ...

    async def close(self): ...

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
