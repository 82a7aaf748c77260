"""
Business logic services package.

Services are imported from their modules directly:
  from crosspay.services.payment_link_service import PaymentLinkService
  from crosspay.services.transaction_service import TransactionService
"""
