"""Pure domain types: sale records, month ranges, price buckets."""
