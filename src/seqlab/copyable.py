# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "seqlab"
__author__ = "The Seqlab contributors"
__all__ = ["Copyable"]

import abc


class Copyable(metaclass=abc.ABCMeta):
    """
    Base class for all objects, that can be copied by value.

    The objects in *Seqlab* are immutable values, so a copy is never
    necessary to protect an object from modification.
    Instead :meth:`copy()` is used to hand out an object, that does not
    share any buffer with the original one, for example when a
    :class:`SequenceCollection` gives away one of its elements.

    The public method :meth:`copy()` first creates a fresh instance of
    the class via :meth:`__copy_create__()`.
    Then :meth:`__copy_fill__()` transfers the remaining state, each
    class in the hierarchy handling its own attributes.
    """

    def copy(self):
        """
        Copy the object.

        Returns
        -------
        copy
            A copy of this object.
        """
        clone = self.__copy_create__()
        self.__copy_fill__(clone)
        return clone

    def __copy_create__(self):
        """
        Create the empty object, that becomes the copy.

        The default implementation calls the constructor without
        arguments, so subclasses whose constructor requires arguments
        override this method.
        Overriding methods do not call `super()`.

        Returns
        -------
        clone
            The new object.
        """
        return type(self)()

    def __copy_fill__(self, clone):
        """
        Transfer the state, that was not passed to the constructor in
        :meth:`__copy_create__()`, to the copy.

        Overriding methods call `super()` first.

        Parameters
        ----------
        clone
            The object created by :meth:`__copy_create__()`.
        """
        pass
