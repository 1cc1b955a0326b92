import numpy as np
import matplotlib.pyplot as plt

from fourierops import fourier_derivative_operator, spectral_viscosity_operator


# Set the grid and operators.
n = 128
D = fourier_derivative_operator(0.0, 2 * np.pi, n)
Di = spectral_viscosity_operator(D)
x = D.grids.compute


def rhs(u):
    # Inviscid Burgers in conservation form plus spectral viscosity.
    return -0.5 * D(u * u) + Di(u)


# Integrate past the shock formation time with RK4.
u = np.sin(x) + 0.5
dt = 0.2 / n
nt = int(1.5 / dt)
for _ in range(nt):
    k1 = rhs(u)
    k2 = rhs(u + 0.5 * dt * k1)
    k3 = rhs(u + 0.5 * dt * k2)
    k4 = rhs(u + dt * k3)
    u = u + dt * (k1 + 2 * k2 + 2 * k3 + k4) / 6


fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
ax1.plot(x, u, "k-")
ax1.set_xlabel("x")
ax1.set_ylabel("u")
ax1.set_title(f"t = {nt * dt:.2f}")
Di.plot_coefficients(fig=fig, ax=ax2, color="r")
plt.show()
