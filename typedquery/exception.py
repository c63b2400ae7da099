"""Classes containing the exceptions for reporting errors.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['Error', 'InterfaceError', 'InvalidArgumentError',
           'OutOfBoundsError', 'DriverError', 'driver_error_handler']


class Error(Exception):
    def __init__(self, value):
        super(Error, self).__init__(value)
        self.__value = value

    def __str__(self):
        return str(self.__value)


class InterfaceError(Error):
    """Raised when this package is used incorrectly."""

    def __init__(self, value):
        Error.__init__(self, value)


class InvalidArgumentError(Error):
    """Raised for a malformed template, type code, value or configuration."""

    def __init__(self, value):
        Error.__init__(self, value)


class OutOfBoundsError(Error):
    """Raised when a placeholder refers to an argument that was not given."""

    def __init__(self, value, index=None):
        Error.__init__(self, value)
        self.index = index


class DriverError(Error):
    """Raised for failures reported by the underlying database driver."""

    driver_error = None

    def __init__(self, value, driver_error=None):
        Error.__init__(self, value)
        self.driver_error = driver_error


def driver_error_handler(error):
    # type: (BaseException) -> DriverError
    """Translate an exception raised by a PEP 249 driver.

    :param error: The exception raised by the driver.
    :returns: A DriverError carrying the driver's message.
    """
    if isinstance(error, DriverError):
        return error
    name = type(error).__name__
    message = str(error)
    if message:
        return DriverError(name + ': ' + message, error)
    return DriverError(name, error)
