"""
Services - use cases on top of the domain.

- processor: one payment attempt end-to-end
- account: profile summary and history listing
"""
