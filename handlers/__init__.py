"""
Handlers package - bot handlers using aiogram Router.

cart/               - Cart and checkout
  ├── add.py        - /start deep links and add-to-cart
  ├── view.py       - /cart, quantity and remove buttons
  ├── checkout.py   - Delivery form, bank details, payment confirmation
  └── router.py     - Wires the submodules onto one router
common/
  └── states.py     - FSM states
"""
