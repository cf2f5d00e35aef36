"""
Batch processor for grouping entries into provider-sized requests.

Hosted providers cap the number of documents per request (25 for Amazon
Comprehend batch APIs) or work best with bounded prompt sizes, so clients
slice their input into ordered batches before calling out.
"""

from typing import List, Sequence, TypeVar

T = TypeVar('T')


class BatchProcessor:
    """
    Groups entries into batches for provider calls.

    Entries keep their input order within and across batches, so a batch's
    position plus an item's offset gives back the item's index in the input.

    Attributes:
        max_batch_size: Maximum number of entries per batch
    """

    def __init__(self, max_batch_size: int = 25):
        """
        Initialize the batch processor.

        Args:
            max_batch_size: Maximum number of entries per provider call.

        Raises:
            ValueError: If max_batch_size is less than 1
        """
        if max_batch_size < 1:
            raise ValueError("max_batch_size must be at least 1")

        self.max_batch_size = max_batch_size

    def create_batches(self, items: Sequence[T]) -> List[List[T]]:
        """
        Split items into consecutive batches.

        Examples:
            >>> processor = BatchProcessor(max_batch_size=25)
            >>> batches = processor.create_batches(list(range(60)))
            >>> [len(batch) for batch in batches]
            [25, 25, 10]

        Notes:
            - Empty input returns an empty list of batches
            - The last batch may hold fewer than max_batch_size items
        """
        if not items:
            return []

        batches = []
        for i in range(0, len(items), self.max_batch_size):
            batches.append(list(items[i:i + self.max_batch_size]))

        return batches

    def batch_offsets(self, items: Sequence[T]) -> List[int]:
        """Index in the input of the first item of each batch."""
        return list(range(0, len(items), self.max_batch_size))
