import os
import re
import time
import argparse
import numpy as np
import pandas as pd
import multiprocessing
from functools import partial
import logging

from ekflow.data.network_reader import read_network, compute_reference_max_flow
from ekflow.algorithms.edmonds_karp import MaxFlowSolver
from ekflow.algorithms.flow_checks import verify_flow_conservation, verify_capacity_respect, cut_capacity
from ekflow.visualization.plotter import plot_augmentation_history, plot_path_lengths
from ekflow.utils.config import Config
from ekflow.utils.logging_utils import setup_queue_logging, setup_main_logger

def instance_name_of(network_path: str) -> str:
    return os.path.basename(network_path).replace('.txt', '')

def solve_instance(network_path: str, config: dict, logger: logging.Logger) -> dict:
    """
    Reads one network, solves it and checks the result against networkx.
    """
    instance_name = instance_name_of(network_path)
    network_data = read_network(network_path)
    logger.info(
    f'''\n    ----- Network Info -----
    Filename: {network_data.info["filename"]}
    Number of nodes: {network_data.info["num_nodes"]}
    Number of edges: {network_data.info["num_edges"]}
    Source: {network_data.info["source"]}
    Sink: {network_data.info["sink"]}
    Total source capacity: {network_data.info["total_source_capacity"]}
    Total sink capacity: {network_data.info["total_sink_capacity"]}
------------------------\n'''
    )

    start_time = time.time()
    solver = MaxFlowSolver(network_data.graph, config, logger=logger, label=instance_name)
    result = solver.solve(network_data.source, network_data.sink)
    execution_time = time.time() - start_time

    reference_flow = compute_reference_max_flow(network_data)
    flow_map = result.flow_map()
    source_side, _, cut_edges = result.min_cut()

    return {
        "instance": instance_name,
        "num_nodes": network_data.info["num_nodes"],
        "num_edges": network_data.info["num_edges"],
        "max_flow": result.value,
        "reference_flow": reference_flow,
        "min_cut_capacity": cut_capacity(network_data.graph, source_side),
        "cut_edges": len(cut_edges),
        "conservation_ok": verify_flow_conservation(flow_map, network_data.source, network_data.sink),
        "capacity_ok": verify_capacity_respect(network_data.graph, flow_map),
        "complete": result.complete,
        "augmentations": result.augmentations,
        "history": result.history,
        "path_lengths": result.path_lengths,
        "execution_time": execution_time,
    }

def run_single_instance(network_path: str, log_queue, config: dict, show_logs: bool) -> dict:
    """
    Function to execute in each parallel process.
    """
    setup_queue_logging(log_queue)
    logger = logging.getLogger()
    if not show_logs:
        logger.setLevel(logging.WARNING)
    return solve_instance(network_path, config, logger)

def process_results(results: list, total_execution_time: float, config: dict, output_dir: str):
    """
    Takes the collected results and generates the summary table and plots.
    """
    rows = []
    for res in sorted(results, key=lambda x: x['instance']):
        path_lengths = np.array(res["path_lengths"]) if res["path_lengths"] else np.zeros(1)
        rows.append({
            "Instance": res["instance"], "Nodes": res["num_nodes"], "Edges": res["num_edges"],
            "Max Flow": res["max_flow"], "Reference": res["reference_flow"],
            "Min Cut": res["min_cut_capacity"],
            "Matches": res["max_flow"] == res["reference_flow"] and res["complete"],
            "Augmentations": res["augmentations"],
            "Mean Path Length": float(np.mean(path_lengths)), "Max Path Length": int(np.max(path_lengths)),
            "Valid Flow": res["conservation_ok"] and res["capacity_ok"],
            "Execution Time (s)": res["execution_time"],
        })
    summary_df = pd.DataFrame(rows)

    summary_log = "="*80 + "\n--- Max Flow Summary ---\n" + "="*80 + "\n"
    summary_log += f"  Instances solved:                {len(results)}\n"
    summary_log += f"  Matching the networkx reference: {int(summary_df['Matches'].sum()) if rows else 0}\n"
    summary_log += f"  Total augmentations:             {int(summary_df['Augmentations'].sum()) if rows else 0}\n"
    summary_log += f"  Total execution time:            {total_execution_time:.4f} seconds\n"
    summary_log += "\n" + "="*80 + "\n--- Per-Instance Statistics ---\n" + "="*80 + "\n"
    summary_log += summary_df.to_string(index=False)

    logging.info(summary_log)

    if config['visualization']['save_plots']:
        plot_style = config['visualization'].get('style', 'light')
        logging.info("\n" + "="*80 + f"\n--- Generating Plots (Style: {plot_style}) ---\n" + "="*80)
        for res in results:
            if not res["history"]:
                continue
            p1_path = plot_augmentation_history(res["history"], res["instance"], output_dir,
                                                style=plot_style, reference_flow=res["reference_flow"])
            logging.info(f"  -> Saved augmentation history plot to: {p1_path}")
            p2_path = plot_path_lengths(res["path_lengths"], res["instance"], output_dir, style=plot_style)
            logging.info(f"  -> Saved path length plot to: {p2_path}")

    return summary_df

def run_experiment(network_paths: list, config: dict, parallel: bool, run_name: str):
    output_dir = os.path.join(config['output']['results_directory'], run_name)

    with multiprocessing.Manager() as manager:
        log_queue = manager.Queue()

        listener = setup_main_logger(output_dir, run_name, log_queue)
        listener.start()

        main_logger = logging.getLogger()

        main_logger.info("="*60)
        main_logger.info(f"--- SOLVING {len(network_paths)} INSTANCE(S): {run_name} ---")
        show_worker_logs = config['output'].get('show_worker_logs_in_parallel', True)
        if parallel and not show_worker_logs:
             main_logger.info("--- Execution Mode: PARALLEL (Worker logs are hidden) ---")
        else:
             main_logger.info(f"--- Execution Mode: {'PARALLEL' if parallel else 'SEQUENTIAL'} ---")
        main_logger.info("="*60)

        total_start_time = time.time()

        if parallel:
            worker_func = partial(run_single_instance,
                                  log_queue=log_queue,
                                  config=config,
                                  show_logs=show_worker_logs)
            with multiprocessing.Pool() as pool:
                results = pool.map(worker_func, network_paths)
        else:
            results = [solve_instance(path, config, main_logger) for path in network_paths]

        total_execution_time = time.time() - total_start_time

        process_results(results, total_execution_time, config, output_dir)

        main_logger.info(f"\n--- {run_name} Complete ---")

        listener.stop()
    return results

def get_number_from_filename(filename):
    match = re.search(r'(\d+)', filename)
    return int(match.group(1)) if match else 0

def main():
    parser = argparse.ArgumentParser(description="Solve maximum flow instances with Edmonds-Karp")
    parser.add_argument('--network', type=str, help='Path to a specific network file.')
    parser.add_argument('--all', action='store_true', help='Solve every network in the network directory.')
    parser.add_argument('--parallel', action='store_true', help='Solve instances in parallel processes.')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config file.')
    args = parser.parse_args()

    config = Config(args.config).as_dict()
    parallel = args.parallel or config['experiments'].get('parallel', False)

    if args.network:
        run_experiment([args.network], config, parallel, instance_name_of(args.network))
    elif args.all:
        network_dir = config['experiments']['network_directory']
        network_files = [f for f in os.listdir(network_dir) if f.endswith(".txt")]
        sorted_files = sorted(network_files, key=get_number_from_filename)

        print("\n" + "="*70)
        print("Processing networks in numerical order based on filename:")
        print("="*70)

        network_paths = [os.path.join(network_dir, filename) for filename in sorted_files]
        run_experiment(network_paths, config, parallel, "all_networks")

        print("\nAll instances are solved.")
    else:
        print("Error: Please specify a network file with --network <path> or use --all.")

if __name__ == "__main__":
    multiprocessing.freeze_support()
    main()
