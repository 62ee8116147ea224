import casadi as ca

EPS = 1e-7  # to avoid divide by zero
SMALL_ANGLE = 1e-4  # below this angle V of SE2/SE3 exp and log is the identity
GROUP_TOL = 1e-6  # membership tolerance used by make

x = ca.SX.sym("x")

series_dict = {}

# sin(x)/x
series_dict["sin(x)/x"] = ca.Function(
    "sinc",
    [x],
    [ca.if_else(ca.fabs(x) < EPS, 1 - x**2 / 6 + x**4 / 120, ca.sin(x) / x)],
)

# (1 - cos(x))/x
series_dict["(1 - cos(x))/x"] = ca.Function(
    "cosc",
    [x],
    [
        ca.if_else(
            ca.fabs(x) < EPS,
            x / 2 - x**3 / 24 + x**5 / 720,
            (1 - ca.cos(x)) / x,
        )
    ],
)

# (1 - cos(x))/x^2
series_dict["(1 - cos(x))/x^2"] = ca.Function(
    "cosc2",
    [x],
    [
        ca.if_else(
            ca.fabs(x) < EPS,
            0.5 - x**2 / 24 + x**4 / 720,
            (1 - ca.cos(x)) / x**2,
        )
    ],
)

# (x - sin(x))/x^3
series_dict["(x - sin(x))/x^3"] = ca.Function(
    "sinc3",
    [x],
    [
        ca.if_else(
            ca.fabs(x) < EPS,
            1 / 6 - x**2 / 120 + x**4 / 5040,
            (x - ca.sin(x)) / x**3,
        )
    ],
)

# x/(2 sin(x))
series_dict["x/(2 sin(x))"] = ca.Function(
    "dinc",
    [x],
    [
        ca.if_else(
            ca.fabs(x) < EPS,
            0.5 + x**2 / 12 + 7 * x**4 / 720,
            x / (2 * ca.sin(x)),
        )
    ],
)

# delete temp variable used to create functions
del x


def series(name, value):
    """
    Evaluate one of the series_dict coefficient functions at a float.
    """
    return float(series_dict[name](float(value)))
