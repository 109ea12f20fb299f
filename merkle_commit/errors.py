class MerkleError(ValueError):
    """Base class for every error raised by merkle_commit."""


class EmptyInputError(MerkleError):
    pass


class IndexOutOfRangeError(MerkleError, IndexError):
    pass


class InvalidIndexError(MerkleError):
    pass


class InvalidDigestError(MerkleError):
    pass


class InvalidAddressError(MerkleError):
    pass


class InvalidLeafDataError(MerkleError):
    pass


class DuplicateLeafError(MerkleError):
    pass
