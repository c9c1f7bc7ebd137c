"""
Online Payments - Console Payment Demo

A small, single-process payment menu:
1. Register and log in with a phone number and password
2. Pay by card, wallet or UPI-style transfer (capped per transaction)
3. Review payment history and a profile summary
4. Every created payment is appended to a plaintext transaction log

No money moves anywhere. The domain layer is pure and fully testable;
the console shell is a thin client on top of it.
"""

__version__ = "1.0.0"
