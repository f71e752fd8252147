#!/usr/bin/env python3
"""
CPU Profile Analyzer - command line entry point
"""

import sys
from profile_analyzer import ProfileAnalyzer, ProfileFormatError


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Analyze a V8 .cpuprofile file and report where time was spent.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_profile.py app.cpuprofile
  python analyze_profile.py app.cpuprofile --top 50
  python analyze_profile.py app.cpuprofile --root-path /home/me/project
        """
    )
    parser.add_argument('input_file', help='Path to the .cpuprofile file')
    parser.add_argument('-n', '--top', type=int, default=20, help='Number of locations to list')
    parser.add_argument('--root-path', default=None,
                       help='Directory used to show source paths relatively')
    parser.add_argument('--dependency-marker', default='node_modules',
                       help='URL substring that marks third-party code')
    args = parser.parse_args()

    analyzer = ProfileAnalyzer(
        root_path=args.root_path,
        dependency_marker=args.dependency_marker
    )

    try:
        print(f"\nConfiguration:")
        print(f"  Input file: {args.input_file}")
        print(f"  Root path: {args.root_path or '(from profile)'}")
        print(f"  Dependency marker: {args.dependency_marker}\n")
        model = analyzer.process_profile_file(args.input_file)
    except FileNotFoundError:
        print(f"Error: File '{args.input_file}' not found.")
        sys.exit(1)
    except ProfileFormatError as e:
        print(f"Error: Malformed profile: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    total = model.total_self_time
    print(f"\nTop {args.top} locations by self time:")
    for entry in analyzer.top_locations(limit=args.top):
        location = entry['location']
        frame = location.call_frame
        where = location.src.relative_path if location.src and location.src.relative_path else frame.url
        share = entry['self_time'] / total * 100 if total else 0.0
        print(f"  {analyzer.format_time(entry['self_time']):>12}  {share:5.1f}%  "
              f"{frame.function_name}  {where}:{frame.line_number + 1}")

    print(f"\n✓ Analysis complete!")


if __name__ == "__main__":
    main()
