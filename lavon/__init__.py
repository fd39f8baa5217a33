"""Installment, payment-status and reporting core for the Lavon sales back office."""
