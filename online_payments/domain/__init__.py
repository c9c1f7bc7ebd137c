"""
Domain Layer - Pure Business Logic

This layer contains:
- Validators (syntactic checks on card numbers, wallet emails, UPI handles)
- Value objects (Money, PaymentIdentifier)
- Payment records and their Pending -> Success | Failed lifecycle
- Users with salted password digests and payment history

Key principle: ZERO dependencies on infrastructure or console I/O.
"""
