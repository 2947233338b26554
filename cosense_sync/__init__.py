"""One-way incremental page sync between Cosense projects."""
