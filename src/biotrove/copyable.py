# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove"
__author__ = "The Biotrove contributors"
__all__ = ["Copyable"]

import abc


class Copyable(metaclass=abc.ABCMeta):
    """
    Base class for sequences, profiles and other containers that are
    handed out as independent copies.

    :meth:`copy()` instantiates the new object via
    :meth:`__copy_create__()` and lets every class in the hierarchy
    transfer its own state in :meth:`__copy_fill__()`, starting with
    the uppermost base class.
    Hence a subclass never needs to know the private attributes of
    its superclasses.
    """

    def copy(self):
        """
        Copy the object.

        Returns
        -------
        copy
            A copy of this object, that shares no mutable state with
            the original.
        """
        clone = self.__copy_create__()
        self.__copy_fill__(clone)
        return clone

    def __copy_create__(self):
        """
        Instantiate an empty object of the same class.

        Override this method, if the constructor requires arguments.
        Do not call the `super()` method here.
        """
        return type(self)()

    def __copy_fill__(self, clone):
        """
        Transfer the state of this object to `clone`.

        Always call the `super()` method as first statement.
        """
        pass
