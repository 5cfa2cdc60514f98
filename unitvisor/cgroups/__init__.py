"""Process tracking and freezing with cgroups v1 and v2."""