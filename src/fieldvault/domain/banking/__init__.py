"""Banking domain: records holding payout banking details."""
