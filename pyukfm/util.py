def rk4(f, t, y, h):
    """Runge Kuta 4th order integrator"""
    k1 = f(t, y) * h
    k2 = f(t + h / 2, y + k1 / 2) * h
    k3 = f(t + h / 2, y + k2 / 2) * h
    k4 = f(t + h, y + k3) * h
    return y + (k1 + k2 * 2 + k3 * 2 + k4) / 6
