# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.mass"
__author__ = "The Biotrove contributors"
__all__ = ["convolve_spectra"]

from collections import Counter


def convolve_spectra(spectrum1, spectrum2):
    """
    Find the mass shift between two quantized spectra by spectral
    convolution.

    The convolution is the multiset of all positive differences
    *m2 - m1* of a mass *m1* from the first and a mass *m2* from the
    second spectrum.

    Parameters
    ----------
    spectrum1, spectrum2 : iterable object of int
        The quantized spectra, e.g. from :func:`quantize()`.

    Returns
    -------
    diff : int or None
        The difference with the highest multiplicity.
        If multiple differences have the highest multiplicity, the one
        reaching it first is returned.
        None, if there is no positive difference.
    mult : int
        The multiplicity of the difference.

    Examples
    --------

    >>> print(convolve_spectra([0, 100, 200], [50, 150, 250, 260]))
    (50, 3)
    """
    spectrum2 = [int(m) for m in spectrum2]
    differences = Counter()
    diff = None
    mult = 0
    for m1 in spectrum1:
        m1 = int(m1)
        for m2 in spectrum2:
            d = m2 - m1
            if d <= 0:
                continue
            differences[d] += 1
            if differences[d] > mult:
                mult = differences[d]
                diff = d
    return diff, mult
