"""Symbolic derivation of the IS and LM curves with SymPy.

Used by the equations panel of the IS-LM explorer; the numeric charts use
the closed form in ``econlab.islm``.
"""

from sympy import Eq, latex, solve, symbols


class ISLMDerivation:
    def __init__(self):
        # Define symbolic variables
        self.Y, self.r = symbols("Y r")
        self.C0, self.I0, self.G, self.T = symbols("C_0 I_0 G T")
        self.c, self.b = symbols("c b", positive=True)
        self.M, self.P, self.k, self.h = symbols("M P k h", positive=True)

    def consumption_function(self):
        """C = C0 + c(Y - T)"""
        return (self.C0 + self.c * (self.Y - self.T)).expand()

    def investment_function(self):
        """I = I0 - b*r"""
        return self.I0 - self.b * self.r

    def money_demand(self):
        """L = k*Y - h*r"""
        return self.k * self.Y - self.h * self.r

    def derive_IS_curve(self):
        """Goods market: Y = C + I + G, solved for r"""
        IS_eq = Eq(self.Y, self.consumption_function() + self.investment_function() + self.G)
        r_IS = solve(IS_eq, self.r)[0]
        return IS_eq, r_IS

    def derive_LM_curve(self):
        """Money market: M/P = L(Y, r), solved for r"""
        LM_eq = Eq(self.M / self.P, self.money_demand())
        r_LM = solve(LM_eq, self.r)[0]
        return LM_eq, r_LM

    def solve_equilibrium(self):
        """Symbolic (Y*, r*) as expressions of the parameters"""
        IS_eq, _ = self.derive_IS_curve()
        LM_eq, _ = self.derive_LM_curve()
        solution = solve([IS_eq, LM_eq], [self.Y, self.r], dict=True)
        if not solution:
            raise ValueError("IS-LM system has no symbolic solution")
        return solution[0][self.Y], solution[0][self.r]

    def substitutions(self, params):
        return {
            self.C0: params.C0,
            self.I0: params.I0,
            self.G: params.G,
            self.T: params.T,
            self.c: params.c,
            self.b: params.b,
            self.M: params.M,
            self.P: params.P,
            self.k: params.k,
            self.h: params.h,
        }

    def evaluate(self, params):
        """Numeric (Y*, r*) from the symbolic solution"""
        Y_sol, r_sol = self.solve_equilibrium()
        subs = self.substitutions(params)
        return float(Y_sol.subs(subs).evalf()), float(r_sol.subs(subs).evalf())

    def latex_equations(self):
        """LaTeX strings for the equations panel"""
        IS_eq, r_IS = self.derive_IS_curve()
        LM_eq, r_LM = self.derive_LM_curve()
        Y_sol, r_sol = self.solve_equilibrium()
        return {
            "IS": f"{latex(IS_eq)} \\;\\Rightarrow\\; r = {latex(r_IS)}",
            "LM": f"{latex(LM_eq)} \\;\\Rightarrow\\; r = {latex(r_LM)}",
            "Y*": f"Y^* = {latex(Y_sol)}",
            "r*": f"r^* = {latex(r_sol)}",
        }
