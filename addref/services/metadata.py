"""Metadata reference construction."""

import os

from ..models import MetadataReference, MetadataReferenceProperties


class FileMetadataService:
    """Builds references with normalized absolute paths.

    Normalizing keeps set-semantics reference attachment from adding the same
    file twice under two spellings.
    """

    def get_reference(
        self,
        path: str,
        properties: MetadataReferenceProperties = MetadataReferenceProperties.ASSEMBLY,
    ) -> MetadataReference:
        if not path or not path.strip():
            raise ValueError("Reference path must not be empty")
        return MetadataReference(path=os.path.normpath(os.path.abspath(path)), properties=properties)
