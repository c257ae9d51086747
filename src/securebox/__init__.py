from securebox.algebra import (
    box_to_vector,
    build_influence_matrix,
    element_influence,
    gf2_gauss,
)
from securebox.box import SecureBox
from securebox.unlock import apply_plan, open_box, plan_unlock
