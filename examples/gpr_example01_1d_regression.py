"""
1D regression with a Gaussian kernel: posterior mean, 95% credible
band and derivative of the mean

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import matplotlib.pyplot as plt

import gpr
import gpr.num as gnp


def generate_data():
    """
    Data generation.

    Returns
    -------
    tuple
        (xt, zt): target data
        (xi, zi): noisy observations
    """
    nt = 200
    xt = gnp.linspace(-1.0, 1.0, nt)
    zt = gpr.misc.testfunctions.twobumps(xt)

    ni = 12
    gnp.set_seed(0)
    xi = 2.0 * gnp.rand(ni) - 1.0
    zi = gpr.misc.testfunctions.twobumps(xi) + 0.05 * gnp.randn(ni)

    return xt, zt, xi, zi


def visualize_results(xt, zt, xi, zi, zpm, zci, dzpm, show=True):
    fig, (ax0, ax1) = plt.subplots(2, 1, sharex=True)
    ax0.plot(xt, zt, "k", linewidth=1, linestyle=(0, (5, 5)), label="truth")
    ax0.plot(xi, zi, "rs", markersize=4, label="data")
    ax0.plot(xt, zpm, "b", linewidth=1, label="posterior mean")
    ax0.fill_between(xt, zpm - zci, zpm + zci, color="b", alpha=0.2, label="95% credible band")
    ax0.set_ylabel("$z$")
    ax0.legend(fontsize=9)
    ax1.plot(xt, dzpm, "b", linewidth=1)
    ax1.set_xlabel("$x$")
    ax1.set_ylabel("derivative")
    fig.suptitle("Gaussian process regression")
    if show:
        plt.show()
    return fig


def main(show=True):
    xt, zt, xi, zi = generate_data()

    kernel = gpr.kernel.GaussianKernel(sigma=0.2, scale=1.0)
    model = gpr.GaussianProcess(
        kernel,
        sigma=0.05 ** 2,
        inversion_method=gpr.InversionMethod.SELF_ADJOINT_EIGEN_SOLVER,
    )
    for x, z in zip(xi, zi):
        model.add_sample([x], [z])

    model.initialize()
    model.describe()

    zpm = gnp.zeros(xt.shape[0])
    zci = gnp.zeros(xt.shape[0])
    dzpm = gnp.zeros(xt.shape[0])
    for i, x in enumerate(xt):
        mean, D = model.predict_derivative([x])
        zpm[i] = mean[0]
        # D omits the 1 / sigma^2 factor of the Gaussian kernel gradient
        dzpm[i] = D[0, 0] / kernel.sigma ** 2
        zci[i] = model.credible_interval([x])

    return visualize_results(xt, zt, xi, zi, zpm, zci, dzpm, show=show)


if __name__ == "__main__":
    main()
