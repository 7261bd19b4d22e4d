class ElfHdrException(Exception):
    '''Base class to extend in order to throw exception in elfhdr.

    It takes a single argument that represents the chain of the fields that
    caused the exception.
    '''

    def __init__(self, chain=None, message=''):
        self.chain = chain if chain is not None else []
        super().__init__(message)


class UnpackException(ElfHdrException):
    '''The buffer is too short for the header it should contain.'''
    pass


class MagicException(ElfHdrException):
    pass


class UnrecoverableException(ElfHdrException):
    '''This is useful when is not possible to let an unknown value
    slip through.'''
    pass
